"""
Feature engineering for the degradation model.

Target: HPI, the session's daily consumption divided by the vessel's own
CFI_clean. Predictors: days since last cleaning, trim (aft - fwd draft)
and displacement.
"""

import logging
from dataclasses import dataclass, asdict
from datetime import date
from typing import Callable, Dict, Iterable, List, Mapping

import numpy as np

from ..data.parsing import parse_event_date
from .baseline import days_between
from .consolidation import ConsolidatedRecord

logger = logging.getLogger(__name__)

# HPI can never be below the clean baseline in this model
MIN_HPI = 1.0

FEATURE_NAMES = ("days_since_cleaning", "trim_adjusted", "displacement")


@dataclass(frozen=True)
class TrainingRecord:
    """One regression sample."""

    hpi: float
    days_since_cleaning: int
    trim_adjusted: float
    displacement: float

    def features(self) -> List[float]:
        return [float(self.days_since_cleaning), self.trim_adjusted, self.displacement]

    def to_dict(self) -> Dict:
        return asdict(self)


def build_training_records(
    records: Iterable[ConsolidatedRecord],
    last_cleaning: Mapping[str, date],
    cfi_for: Callable[[str], float],
) -> List[TrainingRecord]:
    """
    Derive training samples from consolidated sessions.

    Sessions are dropped when the vessel has no cleaning date, the event
    date is unparseable or precedes the cleaning, or the session falls on
    the cleaning day itself.

    Args:
        records: Consolidated sessions
        last_cleaning: Normalized vessel key -> last cleaning date
        cfi_for: Normalized vessel key -> CFI_clean (t/day)

    Returns:
        List of TrainingRecord
    """
    training: List[TrainingRecord] = []
    dropped = 0

    for rec in records:
        cleaning_date = last_cleaning.get(rec.ship_key)
        event_date = parse_event_date(rec.start_gmt_date)
        if cleaning_date is None or event_date is None or event_date < cleaning_date:
            dropped += 1
            continue

        days_since_cleaning = days_between(cleaning_date, event_date)
        if days_since_cleaning < 1:
            dropped += 1
            continue

        hpi = max(rec.daily_consumption / cfi_for(rec.ship_key), MIN_HPI)

        training.append(TrainingRecord(
            hpi=hpi,
            days_since_cleaning=days_since_cleaning,
            trim_adjusted=rec.trim,
            displacement=rec.displacement,
        ))

    logger.info(f"Feature engineering: {len(training)} training rows, {dropped} dropped")
    return training


def to_arrays(training: List[TrainingRecord]):
    """Target vector y and feature matrix X (one column per FEATURE_NAMES)."""
    y = np.array([t.hpi for t in training], dtype=float)
    X = np.array([t.features() for t in training], dtype=float).reshape(-1, len(FEATURE_NAMES))
    return y, X
