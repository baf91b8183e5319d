"""Lifestyle input record consumed by the footprint calculator."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Mapping

import numpy as np

from .constants import DEFAULT_CAR_TYPE, DEFAULT_LEVEL, CarType, ConsumptionLevel
from .errors import InvalidInputError

NUMERIC_FIELDS: tuple[str, ...] = (
    "car_mileage",
    "public_transport_miles",
    "flight_hours",
    "electricity_kwh_per_month",
    "natural_gas_therms_per_month",
    "heating_oil_gallons_per_month",
    "clothing_spend",
    "electronics_spend",
    "other_shopping_spend",
)
LEVEL_FIELDS: tuple[str, ...] = ("meat_level", "dairy_level", "local_food_level")

# Request-body names, followed by the names older clients still send.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "car_mileage": ("carMileage",),
    "car_type": ("carType",),
    "public_transport_miles": ("publicTransportMiles", "publicTransport"),
    "flight_hours": ("flightHours", "flights"),
    "electricity_kwh_per_month": ("electricityKwhPerMonth", "electricity"),
    "natural_gas_therms_per_month": ("naturalGasThermsPerMonth", "naturalGas"),
    "heating_oil_gallons_per_month": ("heatingOilGallonsPerMonth", "heatingOil"),
    "meat_level": ("meatLevel", "meatConsumption"),
    "dairy_level": ("dairyLevel", "dairyConsumption"),
    "local_food_level": ("localFoodLevel", "localFood"),
    "clothing_spend": ("clothingSpend", "clothing"),
    "electronics_spend": ("electronicsSpend", "electronics"),
    "other_shopping_spend": ("otherShoppingSpend", "otherShopping"),
}


def ensure_non_negative(field_name: str, value: Any) -> float:
    """Return ``value`` as a float, raising :class:`InvalidInputError` if it is unusable."""

    if isinstance(value, (bool, np.bool_)):
        raise InvalidInputError(field_name, value, "booleans are not quantities")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidInputError(field_name, value, "empty string")
        try:
            value = float(text)
        except ValueError:
            raise InvalidInputError(field_name, value, "not a number") from None
    try:
        number = float(value)
    except OverflowError:
        raise InvalidInputError(field_name, value, "must be finite") from None
    except (TypeError, ValueError):
        raise InvalidInputError(field_name, value, "not a number") from None
    if not math.isfinite(number):
        raise InvalidInputError(field_name, value, "must be finite")
    if number < 0:
        raise InvalidInputError(field_name, value)
    return number


@dataclass(frozen=True)
class EmissionInput:
    """Annual lifestyle data for one person.

    Distances are miles per year, home energy is per month, shopping is spend per
    year. Car type and food levels accept any string; values outside the known
    set are resolved to ``medium`` when factors are looked up.
    """

    car_mileage: float = 0.0
    car_type: CarType | str = DEFAULT_CAR_TYPE
    public_transport_miles: float = 0.0
    flight_hours: float = 0.0
    electricity_kwh_per_month: float = 0.0
    natural_gas_therms_per_month: float = 0.0
    heating_oil_gallons_per_month: float = 0.0
    meat_level: ConsumptionLevel | str = DEFAULT_LEVEL
    dairy_level: ConsumptionLevel | str = DEFAULT_LEVEL
    local_food_level: ConsumptionLevel | str = DEFAULT_LEVEL
    clothing_spend: float = 0.0
    electronics_spend: float = 0.0
    other_shopping_spend: float = 0.0

    def __post_init__(self) -> None:
        for name in NUMERIC_FIELDS:
            object.__setattr__(self, name, ensure_non_negative(name, getattr(self, name)))
        object.__setattr__(self, "car_type", _coerce_choice(CarType, self.car_type))
        for name in LEVEL_FIELDS:
            object.__setattr__(self, name, _coerce_choice(ConsumptionLevel, getattr(self, name)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EmissionInput":
        """Build an input record from a request body or table row.

        Accepts snake_case names, the camelCase request names, and the short
        legacy names. Keys that match no field are ignored.
        """

        if not isinstance(data, Mapping):
            raise TypeError("EmissionInput.from_mapping expects a mapping")
        kwargs: dict[str, Any] = {}
        for name, aliases in FIELD_ALIASES.items():
            for key in (name, *aliases):
                if key in data and not _is_missing(data[key]):
                    kwargs[name] = data[key]
                    break
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return the record using the camelCase request field names."""
        payload: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, (CarType, ConsumptionLevel)):
                value = value.value
            payload[FIELD_ALIASES[item.name][0]] = value
        return payload


def _coerce_choice(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    text = "" if value is None else str(value).strip().lower()
    try:
        return enum_cls(text)
    except ValueError:
        # Kept as given; the factor lookup applies the fallback.
        return value


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def as_input(value: EmissionInput | Mapping[str, Any]) -> EmissionInput:
    if isinstance(value, EmissionInput):
        return value
    if isinstance(value, Mapping):
        return EmissionInput.from_mapping(value)
    raise TypeError(f"Expected EmissionInput or mapping, got {type(value).__name__}")
