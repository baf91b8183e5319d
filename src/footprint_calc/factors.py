"""Emission factor tables used by the footprint calculator.

A single :class:`EmissionFactorTable` holds every factor the calculator needs.
Tables are immutable once built; replacing the factors used process-wide is done
by swapping the whole table with :func:`set_active_table`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import yaml

from .constants import (
    DEFAULT_CAR_TYPE,
    DEFAULT_FACTORS,
    DEFAULT_LEVEL,
    CarType,
    ConsumptionLevel,
)

LOGGER = logging.getLogger("footprint_calc")

_LEVEL_TABLES = ("meat", "dairy", "local_food")
_SCALAR_FACTORS = ("public_transport", "flight")
_NESTED_REQUIRED: dict[str, tuple[str, ...]] = {
    "car": tuple(member.value for member in CarType),
    "energy": ("electricity", "natural_gas", "heating_oil"),
    "meat": tuple(member.value for member in ConsumptionLevel),
    "dairy": tuple(member.value for member in ConsumptionLevel),
    "local_food": tuple(member.value for member in ConsumptionLevel),
    "shopping": ("clothing", "electronics", "other"),
    "equivalences": (
        "trees_per_ton",
        "miles_per_kg",
        "charges_per_kg",
        "home_energy_days_per_kg",
    ),
}


def _to_factor(value: object, label: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"Emission factor '{label}' must be numeric, got {value!r}.")
    try:
        factor = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Emission factor '{label}' must be numeric, got {value!r}.") from exc
    if not math.isfinite(factor) or factor < 0:
        raise ValueError(f"Emission factor '{label}' must be a finite non-negative number.")
    return factor


def _frozen(values: Mapping[str, float]) -> Mapping[str, float]:
    return MappingProxyType(dict(values))


@dataclass(frozen=True)
class EmissionFactorTable:
    """Read-only emission factors grouped by category."""

    car: Mapping[str, float] = field(default_factory=lambda: _frozen(DEFAULT_FACTORS["car"]))
    public_transport: float = float(DEFAULT_FACTORS["public_transport"])  # type: ignore[arg-type]
    flight: float = float(DEFAULT_FACTORS["flight"])  # type: ignore[arg-type]
    energy: Mapping[str, float] = field(
        default_factory=lambda: _frozen(DEFAULT_FACTORS["energy"])
    )
    meat: Mapping[str, float] = field(default_factory=lambda: _frozen(DEFAULT_FACTORS["meat"]))
    dairy: Mapping[str, float] = field(default_factory=lambda: _frozen(DEFAULT_FACTORS["dairy"]))
    local_food: Mapping[str, float] = field(
        default_factory=lambda: _frozen(DEFAULT_FACTORS["local_food"])
    )
    shopping: Mapping[str, float] = field(
        default_factory=lambda: _frozen(DEFAULT_FACTORS["shopping"])
    )
    equivalences: Mapping[str, float] = field(
        default_factory=lambda: _frozen(DEFAULT_FACTORS["equivalences"])
    )

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, object] | None) -> "EmissionFactorTable":
        """Build a table from a nested mapping, overlaying it on the defaults.

        Unknown top-level keys are rejected so that typos in factor files do not
        silently fall back to default values.
        """

        cfg = cfg or {}
        if not isinstance(cfg, Mapping):
            raise ValueError("Emission factor configuration must be a mapping.")
        unknown = sorted(set(cfg) - set(DEFAULT_FACTORS))
        if unknown:
            raise ValueError(f"Unknown emission factor sections: {unknown}")

        values: dict[str, object] = {}
        for name in _SCALAR_FACTORS:
            values[name] = _to_factor(cfg.get(name, DEFAULT_FACTORS[name]), name)

        for name, required in _NESTED_REQUIRED.items():
            section = cfg.get(name)
            merged = {key: float(val) for key, val in DEFAULT_FACTORS[name].items()}  # type: ignore[union-attr]
            if section is not None:
                if not isinstance(section, Mapping):
                    raise ValueError(f"Emission factor section '{name}' must be a mapping.")
                for key, val in section.items():
                    merged[str(key).strip().lower()] = _to_factor(val, f"{name}.{key}")
            missing = [key for key in required if key not in merged]
            if missing:
                raise ValueError(f"Emission factor section '{name}' is missing keys: {missing}")
            values[name] = _frozen(merged)
        return cls(**values)  # type: ignore[arg-type]

    def car_factor(self, car_type: CarType | str | None) -> float:
        """kg CO2e per mile for ``car_type``; unknown types use the medium factor."""
        key = _normalise_key(car_type)
        if key in self.car:
            return self.car[key]
        LOGGER.debug("Unknown car type %r; using '%s' factor", car_type, DEFAULT_CAR_TYPE.value)
        return self.car[DEFAULT_CAR_TYPE.value]

    def level_factor(self, table: str, level: ConsumptionLevel | str | None) -> float:
        """Annual kg CO2e for ``level`` in one of the food tables.

        Unrecognised levels resolve to the table's ``medium`` value. ``none`` is a
        real level and is looked up like any other.
        """
        if table not in _LEVEL_TABLES:
            raise KeyError(f"'{table}' is not a consumption-level table; use one of {_LEVEL_TABLES}")
        values: Mapping[str, float] = getattr(self, table)
        key = _normalise_key(level)
        if key in values:
            return values[key]
        LOGGER.debug("Unknown %s level %r; using '%s' value", table, level, DEFAULT_LEVEL.value)
        return values[DEFAULT_LEVEL.value]

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {}
        for name in DEFAULT_FACTORS:
            value = getattr(self, name)
            data[name] = dict(value) if isinstance(value, Mapping) else value
        return data


def _normalise_key(value: Enum | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        value = value.value
    return str(value).strip().lower()


def load_emission_factors(path: Path | str) -> EmissionFactorTable:
    """Load an emission factor table from a YAML file."""
    path = Path(path).expanduser()
    if not path.is_file():
        raise FileNotFoundError(f"Emission factors file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    # Factor files may nest the table under an ``emission_factors`` key.
    if isinstance(raw, Mapping) and "emission_factors" in raw:
        raw = raw["emission_factors"]
    table = EmissionFactorTable.from_mapping(raw)
    LOGGER.info("Loaded emission factors from %s", path)
    return table


_ACTIVE_TABLE = EmissionFactorTable()


def get_active_table() -> EmissionFactorTable:
    """Return the process-wide factor table."""
    return _ACTIVE_TABLE


def set_active_table(table: EmissionFactorTable) -> EmissionFactorTable:
    """Swap the process-wide factor table and return the previous one."""
    global _ACTIVE_TABLE
    if not isinstance(table, EmissionFactorTable):
        raise TypeError("table must be an EmissionFactorTable")
    previous = _ACTIVE_TABLE
    _ACTIVE_TABLE = table
    return previous


def resolve_table(factors: EmissionFactorTable | None) -> EmissionFactorTable:
    return _ACTIVE_TABLE if factors is None else factors
