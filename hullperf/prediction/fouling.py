"""
Fouling metrics derived from HPI.

- Relative drag and extra fuel burned versus the clean hull
- Estimated biofouling coverage of the hull (%)
- Biofouling level (0-4) and status label for dashboards
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

CLEAN_HPI = 1.0

# HPI -> estimated coverage (%) breakpoints, linearly interpolated
COVERAGE_BREAKPOINTS_HPI = (1.000, 1.025, 1.050, 1.100, 1.200)
COVERAGE_BREAKPOINTS_PCT = (0.0, 1.0, 15.0, 40.0, 100.0)

# Level boundaries (level 2 uses the vessel's dynamic threshold)
HPI_URGENT = 1.08
HPI_CRITICAL = 1.06


class FoulingLevel(Enum):
    """Biofouling level with its dashboard status label."""
    CLEAN = (0, "clean")
    ATTENTION = (1, "attention — microfouling")
    ALERT = (2, "alert — light macrofouling")
    CRITICAL = (3, "critical — moderate macrofouling")
    URGENT = (4, "urgent — heavy macrofouling")

    @property
    def level(self) -> int:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]


@dataclass(frozen=True)
class FoulingMetrics:
    """Per-day metrics for a projected HPI."""
    drag_percent: float
    extra_fuel_ton_per_day: float
    estimated_coverage_percent: float


def drag_percent(hpi: float) -> float:
    """Relative drag increase over the clean hull (%)."""
    return max(0.0, (hpi - CLEAN_HPI) * 100.0)


def extra_fuel_ton_per_day(hpi: float, cfi_clean_ton_per_day: float) -> float:
    """Fuel burned per day above the clean-hull consumption."""
    return max(0.0, cfi_clean_ton_per_day * (hpi - CLEAN_HPI))


def estimated_coverage_percent(hpi: float) -> float:
    """
    Estimated biofouling coverage for an HPI.

    Piecewise linear over the breakpoints; 0 at or below a clean hull,
    100 from HPI 1.2 upward. Rounded to two decimals.
    """
    coverage = np.interp(
        hpi,
        COVERAGE_BREAKPOINTS_HPI,
        COVERAGE_BREAKPOINTS_PCT,
        left=COVERAGE_BREAKPOINTS_PCT[0],
        right=COVERAGE_BREAKPOINTS_PCT[-1],
    )
    return round(float(coverage), 2)


def compute_metrics(hpi: float, cfi_clean_ton_per_day: float) -> FoulingMetrics:
    return FoulingMetrics(
        drag_percent=drag_percent(hpi),
        extra_fuel_ton_per_day=extra_fuel_ton_per_day(hpi, cfi_clean_ton_per_day),
        estimated_coverage_percent=estimated_coverage_percent(hpi),
    )


def classify_fouling(hpi: float, threshold: float) -> FoulingLevel:
    """
    Biofouling level for the current HPI.

    Args:
        hpi: Current hull performance index
        threshold: The vessel's dynamic cleaning threshold

    Returns:
        FoulingLevel
    """
    if hpi >= HPI_URGENT:
        return FoulingLevel.URGENT
    if hpi >= HPI_CRITICAL:
        return FoulingLevel.CRITICAL
    if hpi >= threshold:
        return FoulingLevel.ALERT
    if hpi > CLEAN_HPI:
        return FoulingLevel.ATTENTION
    return FoulingLevel.CLEAN
