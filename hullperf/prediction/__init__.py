"""Per-query prediction: sanitizer, thresholds, fouling metrics, simulator."""

from .coefficients import ModelCoefficients, sanitize_coefficients
from .thresholds import determine_threshold, DEFAULT_COATING_PERIOD_WEEKS, UNKNOWN_CLASS
from .fouling import FoulingLevel, classify_fouling, compute_metrics
from .simulator import (
    CleaningSuggestion,
    DailyPrediction,
    DegradationSimulator,
    fallback_suggestion,
    PROJECTION_DAYS,
)

__all__ = [
    "ModelCoefficients",
    "sanitize_coefficients",
    "determine_threshold",
    "DEFAULT_COATING_PERIOD_WEEKS",
    "UNKNOWN_CLASS",
    "FoulingLevel",
    "classify_fouling",
    "compute_metrics",
    "CleaningSuggestion",
    "DailyPrediction",
    "DegradationSimulator",
    "fallback_suggestion",
    "PROJECTION_DAYS",
]
