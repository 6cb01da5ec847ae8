"""
Per-vessel cleaning thresholds.

The HPI at which a hull cleaning is due depends on the vessel class
(larger hulls tolerate a lower relative penalty before the absolute fuel
waste justifies an intervention) and on the coating: standard coatings
foul faster and get a tighter threshold, premium long-life coatings a
looser one.
"""

from typing import Dict, Optional

from ..data.identity import normalize

# Base threshold per normalized ship class
CLASS_THRESHOLDS: Dict[str, float] = {
    "SUEZMAX": 1.030,
    "AFRAMAX": 1.025,
    "PRODUCT CARRIER": 1.020,
    "GASEIRO": 1.028,
}
DEFAULT_THRESHOLD = 1.0275

# Coating base verification period (weeks)
STANDARD_COATING_MAX_WEEKS = 35
PREMIUM_COATING_MIN_WEEKS = 120
DEFAULT_COATING_PERIOD_WEEKS = 52
COATING_ADJUSTMENT = 0.005

UNKNOWN_CLASS = "UNKNOWN"


def base_threshold(ship_class: Optional[str]) -> float:
    """Threshold for a ship class, DEFAULT_THRESHOLD for unknown classes."""
    return CLASS_THRESHOLDS.get(normalize(ship_class), DEFAULT_THRESHOLD)


def coating_adjustment(base_period_weeks: Optional[int]) -> float:
    """Threshold offset for a coating base verification period."""
    if base_period_weeks is None:
        return 0.0
    if base_period_weeks <= STANDARD_COATING_MAX_WEEKS:
        return -COATING_ADJUSTMENT
    if base_period_weeks >= PREMIUM_COATING_MIN_WEEKS:
        return COATING_ADJUSTMENT
    return 0.0


def determine_threshold(ship_class: Optional[str], base_period_weeks: Optional[int]) -> float:
    """
    HPI threshold at which the simulator flags a cleaning.

    Example:
        >>> round(determine_threshold("Suezmax", 20), 4)
        1.025
    """
    return base_threshold(ship_class) + coating_adjustment(base_period_weeks)
