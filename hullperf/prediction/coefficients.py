"""
Coefficient sanitizing.

Fleet telemetry is noisy and the OLS fit can come out degenerate: a
negative degradation rate, a rate that would foul a hull in weeks, or an
intercept implying the hull was already dirty right after docking. The
sanitizer replaces those values with plausible defaults before every
simulation.
"""

import logging
import math
from dataclasses import dataclass
from typing import Sequence

logger = logging.getLogger(__name__)

# Degradation rate bounds (HPI per day)
DEFAULT_DEGRADATION_RATE = 0.0005
MAX_DEGRADATION_RATE = 0.005

# Intercept bounds: HPI of a freshly cleaned hull
MIN_INTERCEPT = 1.0
MAX_CLEAN_INTERCEPT = 1.03


@dataclass(frozen=True)
class ModelCoefficients:
    """Sanitized coefficients used by the simulator."""

    intercept: float
    beta_days: float
    beta_trim: float = 0.0
    beta_displacement: float = 0.0

    def hpi_at(self, days_since_cleaning: float, trim: float = 0.0, displacement: float = 0.0) -> float:
        """Raw (unclamped) model HPI."""
        return (
            self.intercept
            + self.beta_days * days_since_cleaning
            + self.beta_trim * trim
            + self.beta_displacement * displacement
        )


def _pad(raw: Sequence[float]) -> list:
    """Expand short vectors to [intercept, beta_days, 0, 0]."""
    if len(raw) >= 4:
        return [float(c) for c in raw[:4]]

    intercept = float(raw[0]) if len(raw) > 0 else MIN_INTERCEPT
    beta_days = float(raw[1]) if len(raw) > 1 else DEFAULT_DEGRADATION_RATE
    return [intercept, beta_days, 0.0, 0.0]


def sanitize_coefficients(raw: Sequence[float]) -> ModelCoefficients:
    """
    Correct implausible regression coefficients.

    - beta_days <= 0 or > MAX_DEGRADATION_RATE -> DEFAULT_DEGRADATION_RATE
    - intercept < 1.0 -> 1.0; intercept > MAX_CLEAN_INTERCEPT -> MAX_CLEAN_INTERCEPT

    Args:
        raw: [intercept, beta_days, beta_trim, beta_displacement]; shorter
            vectors are padded

    Returns:
        ModelCoefficients
    """
    intercept, beta_days, beta_trim, beta_displacement = _pad(raw)

    if not beta_days > 0 or beta_days > MAX_DEGRADATION_RATE:
        logger.warning(
            f"Implausible degradation rate {beta_days:.6g}/day, "
            f"using default {DEFAULT_DEGRADATION_RATE}"
        )
        beta_days = DEFAULT_DEGRADATION_RATE

    if not math.isfinite(intercept) or intercept < MIN_INTERCEPT:
        logger.warning(f"Intercept {intercept:.4f} below clean baseline, clamped to {MIN_INTERCEPT}")
        intercept = MIN_INTERCEPT
    elif intercept > MAX_CLEAN_INTERCEPT:
        logger.warning(f"Intercept {intercept:.4f} too high, clamped to {MAX_CLEAN_INTERCEPT}")
        intercept = MAX_CLEAN_INTERCEPT

    return ModelCoefficients(
        intercept=intercept,
        beta_days=beta_days,
        beta_trim=beta_trim,
        beta_displacement=beta_displacement,
    )
