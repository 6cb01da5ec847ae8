"""
Clean-hull baseline estimation (CFI_clean).

A vessel's CFI_clean is its ideal daily fuel consumption: the mean daily
consumption over the first days after a full hull cleaning. Days 0-2 are
post-docking transients (trials, repositioning) and are excluded; after
day 7 the hull can no longer be assumed clean.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Mapping

import numpy as np

from ..data.parsing import parse_event_date
from .consolidation import ConsolidatedRecord

logger = logging.getLogger(__name__)

# Clean window, in days after the last cleaning (inclusive)
CLEAN_WINDOW_START_DAY = 3
CLEAN_WINDOW_END_DAY = 7

# Used when a vessel has no session inside its clean window (tons/day)
FALLBACK_CFI_TON_PER_DAY = 25.0


@dataclass
class BaselineResult:
    """Per-vessel CFI_clean values and the fleet-wide baseline."""

    cfi_clean: Dict[str, float] = field(default_factory=dict)
    samples: Dict[str, int] = field(default_factory=dict)
    fleet_cfi_clean: float = FALLBACK_CFI_TON_PER_DAY

    def cfi_for(self, vessel_key: str) -> float:
        """CFI_clean of a vessel (normalized key), or the fallback constant."""
        return self.cfi_clean.get(vessel_key, FALLBACK_CFI_TON_PER_DAY)


def days_between(start: date, end: date) -> int:
    return (end - start).days


def estimate_cfi_clean(
    records: Iterable[ConsolidatedRecord],
    last_cleaning: Mapping[str, date],
) -> BaselineResult:
    """
    Estimate CFI_clean for every vessel with sessions in its clean window.

    Args:
        records: Consolidated sessions
        last_cleaning: Normalized vessel key -> last cleaning date

    Returns:
        BaselineResult. Vessels without windowed samples are absent from
        ``cfi_clean`` and resolve to FALLBACK_CFI_TON_PER_DAY.
    """
    windowed: Dict[str, List[float]] = {}

    for rec in records:
        cleaning_date = last_cleaning.get(rec.ship_key)
        event_date = parse_event_date(rec.start_gmt_date)
        if cleaning_date is None or event_date is None or event_date < cleaning_date:
            continue

        days_post_cleaning = days_between(cleaning_date, event_date)
        if CLEAN_WINDOW_START_DAY <= days_post_cleaning <= CLEAN_WINDOW_END_DAY:
            windowed.setdefault(rec.ship_key, []).append(rec.daily_consumption)

    result = BaselineResult()
    for vessel, values in windowed.items():
        result.cfi_clean[vessel] = float(np.mean(values))
        result.samples[vessel] = len(values)

    if result.cfi_clean:
        result.fleet_cfi_clean = float(np.mean(list(result.cfi_clean.values())))
    else:
        logger.warning(
            f"No sessions inside the day {CLEAN_WINDOW_START_DAY}-{CLEAN_WINDOW_END_DAY} "
            f"clean window for any vessel, fleet baseline set to "
            f"{FALLBACK_CFI_TON_PER_DAY} t/day"
        )

    logger.info(
        f"CFI_clean estimated for {len(result.cfi_clean)} vessels "
        f"(days {CLEAN_WINDOW_START_DAY}-{CLEAN_WINDOW_END_DAY}), "
        f"fleet baseline {result.fleet_cfi_clean:.3f} t/day"
    )
    return result
