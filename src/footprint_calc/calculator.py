"""Calculate personal annual carbon footprints from lifestyle inputs.

Results are per-category (transportation, home energy, food, shopping) and total
emissions in kg CO₂e/year. Equivalences and the standing against reference
averages are derived from the total by the ``equivalences`` and ``standing``
modules.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Union

import pandas as pd
import yaml
from config_paths import apply_results_run_directory, get_config_path, get_results_run_directory

from .constants import (
    CATEGORIES,
    GLOBAL_AVERAGE_TONS,
    KG_PER_TON,
    MONTHS_PER_YEAR,
    REGIONAL_AVERAGE_TONS,
)
from .equivalences import EquivalenceSet, compute_equivalences
from .errors import InvalidInputError
from .factors import EmissionFactorTable, load_emission_factors, resolve_table
from .inputs import EmissionInput, as_input
from .standing import Standing, classify_standing
from .writers import read_inputs_csv, write_results_csv

LOGGER = logging.getLogger("footprint_calc")
if not LOGGER.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    LOGGER.addHandler(handler)
LOGGER.setLevel(logging.INFO)
LOGGER.propagate = False

InputLike = Union[EmissionInput, Mapping[str, Any]]


@dataclass(frozen=True)
class EmissionResult:
    """Per-category and total annual emissions (kg CO₂e/year)."""

    category_breakdown: Mapping[str, float]
    total_emissions: float

    @classmethod
    def from_breakdown(cls, breakdown: Mapping[str, float]) -> "EmissionResult":
        ordered = {category: float(breakdown[category]) for category in CATEGORIES}
        return cls(
            category_breakdown=MappingProxyType(ordered),
            total_emissions=sum(ordered.values()),
        )

    @property
    def total_tons(self) -> float:
        return self.total_emissions / KG_PER_TON

    def category_shares(self) -> dict[str, float]:
        """Percentage of the total contributed by each category."""
        if self.total_emissions == 0:
            return {category: 0.0 for category in CATEGORIES}
        return {
            category: value / self.total_emissions * 100.0
            for category, value in self.category_breakdown.items()
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalEmissions": self.total_emissions,
            "categoryBreakdown": dict(self.category_breakdown),
        }


@dataclass
class CalculationRecord:
    """Everything computed for one profile in a configured run."""

    profile_id: str
    inputs: EmissionInput
    result: EmissionResult
    equivalences: EquivalenceSet | None
    standing: Standing


def compute_transportation_emissions(
    inp: InputLike, factors: EmissionFactorTable | None = None
) -> float:
    inp = as_input(inp)
    table = resolve_table(factors)
    car = inp.car_mileage * table.car_factor(inp.car_type)
    public = inp.public_transport_miles * table.public_transport
    flights = inp.flight_hours * table.flight
    return _finite_subtotal("transportation", car + public + flights)


def compute_energy_emissions(inp: InputLike, factors: EmissionFactorTable | None = None) -> float:
    inp = as_input(inp)
    energy = resolve_table(factors).energy
    # Inputs are monthly; results are annual.
    electricity = inp.electricity_kwh_per_month * energy["electricity"] * MONTHS_PER_YEAR
    gas = inp.natural_gas_therms_per_month * energy["natural_gas"] * MONTHS_PER_YEAR
    oil = inp.heating_oil_gallons_per_month * energy["heating_oil"] * MONTHS_PER_YEAR
    return _finite_subtotal("energy", electricity + gas + oil)


def compute_food_emissions(inp: InputLike, factors: EmissionFactorTable | None = None) -> float:
    inp = as_input(inp)
    table = resolve_table(factors)
    food = (
        table.level_factor("meat", inp.meat_level)
        + table.level_factor("dairy", inp.dairy_level)
        + table.level_factor("local_food", inp.local_food_level)
    )
    return _finite_subtotal("food", food)


def compute_shopping_emissions(
    inp: InputLike, factors: EmissionFactorTable | None = None
) -> float:
    inp = as_input(inp)
    shopping = resolve_table(factors).shopping
    spend = (
        inp.clothing_spend * shopping["clothing"]
        + inp.electronics_spend * shopping["electronics"]
        + inp.other_shopping_spend * shopping["other"]
    )
    return _finite_subtotal("shopping", spend)


def compute_total_emissions(
    inp: InputLike, factors: EmissionFactorTable | None = None
) -> EmissionResult:
    """Calculate the category breakdown and total footprint for one input record."""
    inp = as_input(inp)
    table = resolve_table(factors)
    result = EmissionResult.from_breakdown(
        {
            "transportation": compute_transportation_emissions(inp, table),
            "energy": compute_energy_emissions(inp, table),
            "food": compute_food_emissions(inp, table),
            "shopping": compute_shopping_emissions(inp, table),
        }
    )
    _finite_subtotal("total_emissions", result.total_emissions)
    LOGGER.debug("Total footprint %.2f kg CO2e/year", result.total_emissions)
    return result


def calculate_batch(
    frame: pd.DataFrame, factors: EmissionFactorTable | None = None
) -> pd.DataFrame:
    """Calculate footprints for every row of ``frame``.

    Columns may use any accepted input naming. The returned frame shares the
    input index and holds one column per category plus ``total_emissions``.
    """
    columns = [*CATEGORIES, "total_emissions"]
    if len(frame.index) == 0:
        return pd.DataFrame(columns=columns, index=frame.index, dtype=float)

    table = resolve_table(factors)
    rows: list[dict[str, float]] = []
    for label, row in frame.iterrows():
        try:
            result = compute_total_emissions(row.to_dict(), table)
        except InvalidInputError as exc:
            raise exc.with_context(f"row {label!r}: ") from exc
        rows.append({**result.category_breakdown, "total_emissions": result.total_emissions})
    return pd.DataFrame(rows, index=frame.index, columns=columns, dtype=float)


def run_from_config(
    config_path: Path | str | None = None,
) -> dict[str, CalculationRecord]:
    """Run footprint calculations described by the ``footprint_calc`` config section."""
    config_path = Path(config_path) if config_path is not None else get_config_path()
    if not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with config_path.open() as handle:
        config = yaml.safe_load(handle) or {}

    module_cfg = config.get("footprint_calc", {})
    if not module_cfg:
        raise ValueError("'footprint_calc' section missing from config.yaml")

    base = config_path.resolve().parent
    factors_setting = module_cfg.get("emission_factors_file")
    if factors_setting:
        table = load_emission_factors(_resolve_path(factors_setting, base))
    else:
        LOGGER.info("No emission_factors_file configured; using built-in factors")
        table = EmissionFactorTable()

    inputs_setting = module_cfg.get("inputs_file")
    if not inputs_setting:
        raise ValueError("'footprint_calc.inputs_file' must point to a CSV of input profiles.")

    averages = module_cfg.get("averages") or {}
    if not isinstance(averages, Mapping):
        raise ValueError("'footprint_calc.averages' must be a mapping.")
    global_tons = _average_setting(averages, "global_tons", GLOBAL_AVERAGE_TONS)
    regional_tons = _average_setting(averages, "regional_tons", REGIONAL_AVERAGE_TONS)
    include_equivalences = module_cfg.get("include_equivalences", True)
    if not isinstance(include_equivalences, bool):
        raise ValueError(
            "'footprint_calc.include_equivalences' must be true or false, "
            f"got {include_equivalences!r}."
        )

    profiles = read_inputs_csv(_resolve_path(inputs_setting, base))
    records: dict[str, CalculationRecord] = {}
    for profile_id, inp in profiles.items():
        LOGGER.info("Calculating profile '%s'", profile_id)
        try:
            result = compute_total_emissions(inp, table)
        except InvalidInputError as exc:
            raise exc.with_context(f"{profile_id}.") from exc
        records[profile_id] = CalculationRecord(
            profile_id=profile_id,
            inputs=inp,
            result=result,
            equivalences=compute_equivalences(result, table) if include_equivalences else None,
            standing=classify_standing(result.total_tons, global_tons, regional_tons),
        )

    output_setting = module_cfg.get("output_file")
    if output_setting:
        output_path = apply_results_run_directory(
            _resolve_path(output_setting, base), get_results_run_directory(config), base=base
        )
        write_results_csv(records, output_path)
        LOGGER.info("Results written to %s", output_path)
    return records


def _resolve_path(path_like: str | Path, base: Path) -> Path:
    path = Path(path_like).expanduser()
    if not path.is_absolute():
        path = (base / path).resolve()
    return path


def _finite_subtotal(category: str, value: float) -> float:
    if not math.isfinite(value):
        raise InvalidInputError(category, value, "result is too large to represent")
    return value


def _average_setting(averages: Mapping[str, Any], key: str, default: float) -> float:
    raw = averages.get(key, default)
    if isinstance(raw, bool):
        raise ValueError(f"'footprint_calc.averages.{key}' must be a number, got {raw!r}.")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValueError(
            f"'footprint_calc.averages.{key}' must be a number, got {raw!r}."
        ) from None
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"'footprint_calc.averages.{key}' must be a positive number, got {raw!r}.")
    return value
