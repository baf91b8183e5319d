from __future__ import annotations

from enum import Enum


class CarType(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    ELECTRIC = "electric"


class ConsumptionLevel(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


DEFAULT_CAR_TYPE = CarType.MEDIUM
DEFAULT_LEVEL = ConsumptionLevel.MEDIUM

CATEGORIES: tuple[str, ...] = ("transportation", "energy", "food", "shopping")
MONTHS_PER_YEAR = 12
KG_PER_TON = 1000.0

# Reference per-capita footprints (t CO2e/year).
GLOBAL_AVERAGE_TONS = 4.7
REGIONAL_AVERAGE_TONS = 15.5

RESULT_UNIT = "kg CO2e/year"

DEFAULT_FACTORS: dict[str, dict[str, float] | float] = {
    # kg CO2e per mile
    "car": {
        "small": 0.29,
        "medium": 0.39,
        "large": 0.57,
        "electric": 0.1,
    },
    "public_transport": 0.16,
    # kg CO2e per flight hour
    "flight": 53.0,
    # kg CO2e per kWh / therm / gallon
    "energy": {
        "electricity": 0.42,
        "natural_gas": 5.3,
        "heating_oil": 10.16,
    },
    # kg CO2e per year
    "meat": {"none": 0.0, "low": 300.0, "medium": 1200.0, "high": 2500.0},
    "dairy": {"none": 0.0, "low": 200.0, "medium": 400.0, "high": 600.0},
    # Inverted: more local food means less transport and processing.
    "local_food": {"none": 400.0, "low": 300.0, "medium": 200.0, "high": 100.0},
    # kg CO2e per currency unit
    "shopping": {
        "clothing": 0.5,
        "electronics": 0.7,
        "other": 0.4,
    },
    "equivalences": {
        "trees_per_ton": 16.5,
        "miles_per_kg": 2.5,
        "charges_per_kg": 33.0,
        "home_energy_days_per_kg": 0.23,
    },
}

# Per-unit factors for single logged activities (kg CO2e per km, kWh, kg or item).
ACTIVITY_FACTORS: dict[str, dict[str, float]] = {
    "transport": {"car": 0.2, "bus": 0.08, "train": 0.04, "plane": 0.25},
    "energy": {"electricity": 0.5, "gas": 0.2, "oil": 0.3},
    "food": {"meat": 13.3, "dairy": 3.2, "vegetables": 0.4},
    "shopping": {"clothes": 10.0, "electronics": 30.0, "furniture": 50.0},
}
FALLBACK_ACTIVITY_FACTOR = 1.0
