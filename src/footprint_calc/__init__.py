from .activities import ActivityEstimate, compute_activity_emissions, estimate_activity
from .calculator import (
    CalculationRecord,
    EmissionResult,
    calculate_batch,
    compute_energy_emissions,
    compute_food_emissions,
    compute_shopping_emissions,
    compute_total_emissions,
    compute_transportation_emissions,
    run_from_config,
)
from .constants import CATEGORIES, CarType, ConsumptionLevel
from .equivalences import EquivalenceSet, compute_equivalences
from .errors import InvalidInputError
from .factors import (
    EmissionFactorTable,
    get_active_table,
    load_emission_factors,
    set_active_table,
)
from .inputs import EmissionInput
from .standing import AverageComparison, Standing, classify_standing, compare_to_averages

__all__ = [
    "CATEGORIES",
    "ActivityEstimate",
    "AverageComparison",
    "CalculationRecord",
    "CarType",
    "ConsumptionLevel",
    "EmissionFactorTable",
    "EmissionInput",
    "EmissionResult",
    "EquivalenceSet",
    "InvalidInputError",
    "Standing",
    "calculate_batch",
    "classify_standing",
    "compare_to_averages",
    "compute_activity_emissions",
    "compute_energy_emissions",
    "compute_equivalences",
    "compute_food_emissions",
    "compute_shopping_emissions",
    "compute_total_emissions",
    "compute_transportation_emissions",
    "estimate_activity",
    "get_active_table",
    "load_emission_factors",
    "run_from_config",
    "set_active_table",
]
