"""Classify a footprint against global and regional per-capita averages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .constants import GLOBAL_AVERAGE_TONS, REGIONAL_AVERAGE_TONS
from .inputs import ensure_non_negative


class Standing(IntEnum):
    WELL_BELOW_GLOBAL_AVERAGE = 1
    BELOW_GLOBAL_AVERAGE = 2
    ABOVE_GLOBAL_BELOW_REGIONAL = 3
    ABOVE_REGIONAL_AVERAGE = 4


@dataclass(frozen=True)
class AverageComparison:
    percent_of_global: float
    percent_of_regional: float
    standing: Standing


def classify_standing(
    tons: float,
    global_average: float = GLOBAL_AVERAGE_TONS,
    regional_average: float = REGIONAL_AVERAGE_TONS,
) -> Standing:
    """Return the band for ``tons`` CO₂e/year. Thresholds are exclusive upper bounds."""
    tons = ensure_non_negative("tons", tons)
    if tons < global_average * 0.5:
        return Standing.WELL_BELOW_GLOBAL_AVERAGE
    if tons < global_average:
        return Standing.BELOW_GLOBAL_AVERAGE
    if tons < regional_average:
        return Standing.ABOVE_GLOBAL_BELOW_REGIONAL
    return Standing.ABOVE_REGIONAL_AVERAGE


def compare_to_averages(
    tons: float,
    global_average: float = GLOBAL_AVERAGE_TONS,
    regional_average: float = REGIONAL_AVERAGE_TONS,
) -> AverageComparison:
    """Relative position against both averages; percentages are capped at 100."""
    tons = ensure_non_negative("tons", tons)
    global_average = ensure_non_negative("global_average", global_average)
    regional_average = ensure_non_negative("regional_average", regional_average)
    return AverageComparison(
        percent_of_global=_capped_percent(tons, global_average),
        percent_of_regional=_capped_percent(tons, regional_average),
        standing=classify_standing(tons, global_average, regional_average),
    )


def describe_standing(standing: Standing) -> str:
    return Standing(standing).name.lower()


def _capped_percent(value: float, reference: float) -> float:
    if reference == 0:
        return 100.0 if value > 0 else 0.0
    return min(value / reference * 100.0, 100.0)
