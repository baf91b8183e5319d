"""Translate an emissions total into intuitive comparison units."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

from .constants import KG_PER_TON
from .factors import EmissionFactorTable, resolve_table
from .inputs import ensure_non_negative

if TYPE_CHECKING:  # pragma: no cover
    from .calculator import EmissionResult

_CAMEL_KEYS = {
    "trees_to_offset": "treesToOffset",
    "miles_driven_equivalent": "milesDrivenEquivalent",
    "phone_charges_equivalent": "phoneChargesEquivalent",
    "home_energy_days_equivalent": "homeEnergyDaysEquivalent",
}


@dataclass(frozen=True)
class EquivalenceSet:
    trees_to_offset: float
    miles_driven_equivalent: float
    phone_charges_equivalent: float
    home_energy_days_equivalent: float

    def to_dict(self) -> dict[str, float]:
        return {_CAMEL_KEYS[key]: value for key, value in asdict(self).items()}


def compute_equivalences(
    total_emissions: float | EmissionResult,
    factors: EmissionFactorTable | None = None,
) -> EquivalenceSet:
    """Express ``total_emissions`` (kg CO₂e/year) as trees, miles, charges and home-energy days."""
    total = getattr(total_emissions, "total_emissions", total_emissions)
    total = ensure_non_negative("total_emissions", total)
    constants = resolve_table(factors).equivalences
    return EquivalenceSet(
        trees_to_offset=(total / KG_PER_TON) * constants["trees_per_ton"],
        miles_driven_equivalent=total * constants["miles_per_kg"],
        phone_charges_equivalent=total * constants["charges_per_kg"],
        home_energy_days_equivalent=total * constants["home_energy_days_per_kg"],
    )
