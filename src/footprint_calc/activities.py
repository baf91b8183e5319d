"""Footprint estimates for single logged activities (a car trip, a meal, a purchase)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from .constants import ACTIVITY_FACTORS, FALLBACK_ACTIVITY_FACTOR
from .inputs import ensure_non_negative

LOGGER = logging.getLogger("footprint_calc")


@dataclass(frozen=True)
class ActivityEstimate:
    category: str
    sub_category: str
    amount: float
    factor: float
    emissions: float
    used_fallback: bool


def estimate_activity(
    category: str,
    sub_category: str,
    amount: float,
    table: Mapping[str, Mapping[str, float]] | None = None,
) -> ActivityEstimate:
    """Multiply ``amount`` by the factor for ``category``/``sub_category``.

    Unknown combinations use a neutral factor of 1.0 and are flagged with
    ``used_fallback``.
    """
    amount = ensure_non_negative("amount", amount)
    factors = ACTIVITY_FACTORS if table is None else table
    cat_key = str(category).strip().lower()
    sub_key = str(sub_category).strip().lower()

    factor = factors.get(cat_key, {}).get(sub_key)
    used_fallback = factor is None
    if used_fallback:
        LOGGER.warning(
            "No activity factor for %s/%s; using %.1f", cat_key, sub_key, FALLBACK_ACTIVITY_FACTOR
        )
        factor = FALLBACK_ACTIVITY_FACTOR
    factor = float(factor)
    return ActivityEstimate(
        category=cat_key,
        sub_category=sub_key,
        amount=amount,
        factor=factor,
        emissions=amount * factor,
        used_fallback=used_fallback,
    )


def compute_activity_emissions(
    category: str,
    sub_category: str,
    amount: float,
    table: Mapping[str, Mapping[str, float]] | None = None,
) -> float:
    return estimate_activity(category, sub_category, amount, table).emissions
