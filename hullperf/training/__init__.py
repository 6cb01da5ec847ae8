"""Batch training pipeline: consolidation, CFI_clean baseline, features, OLS."""

from .consolidation import ConsolidatedRecord, consolidate
from .baseline import BaselineResult, estimate_cfi_clean, FALLBACK_CFI_TON_PER_DAY
from .features import TrainingRecord, build_training_records
from .regression import TrainedModel, fit_degradation_model, MIN_TRAINING_ROWS

__all__ = [
    "ConsolidatedRecord",
    "consolidate",
    "BaselineResult",
    "estimate_cfi_clean",
    "FALLBACK_CFI_TON_PER_DAY",
    "TrainingRecord",
    "build_training_records",
    "TrainedModel",
    "fit_degradation_model",
    "MIN_TRAINING_ROWS",
]
