"""
Degradation model training.

Ordinary least squares on HPI with three predictors (days since cleaning,
trim, displacement). The intercept is estimated by the fit rather than
supplied as a feature column by the caller.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Tuple

import numpy as np
from scipy import linalg

from .features import FEATURE_NAMES, TrainingRecord, to_arrays

logger = logging.getLogger(__name__)

NUM_FEATURES = len(FEATURE_NAMES)

# OLS with an intercept needs more rows than parameters
MIN_TRAINING_ROWS = NUM_FEATURES + 2


class RegressionError(Exception):
    """Raised when the design matrix cannot be fitted."""


@dataclass(frozen=True)
class TrainedModel:
    """
    Fitted coefficients, ordered [intercept, beta_days, beta_trim, beta_displacement].
    """

    coefficients: Tuple[float, ...]
    num_samples: int
    r_squared: float = 0.0
    trained_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "intercept": self.coefficients[0],
            "beta_days": self.coefficients[1],
            "beta_trim": self.coefficients[2],
            "beta_displacement": self.coefficients[3],
            "num_samples": self.num_samples,
            "r_squared": self.r_squared,
            "trained_at": self.trained_at.isoformat() if self.trained_at else None,
        }


def ols_fit(y: np.ndarray, X: np.ndarray) -> Tuple[np.ndarray, float]:
    """
    Fit y = b0 + X @ b with least squares.

    Returns:
        (coefficients including intercept, R squared)

    Raises:
        RegressionError: rank-deficient design or non-finite solution
    """
    design = np.column_stack([np.ones(len(y)), X])
    n_params = design.shape[1]

    if not np.all(np.isfinite(design)) or not np.all(np.isfinite(y)):
        raise RegressionError("non-finite values in training data")

    rank = np.linalg.matrix_rank(design)
    if rank < n_params:
        raise RegressionError(f"singular design matrix (rank {rank} < {n_params})")

    try:
        beta, _, _, _ = linalg.lstsq(design, y)
    except (linalg.LinAlgError, ValueError) as e:
        raise RegressionError(f"least squares failed: {e}") from e

    if not np.all(np.isfinite(beta)):
        raise RegressionError("non-finite coefficients")

    residuals = y - design @ beta
    ss_res = float(np.sum(residuals ** 2))
    ss_tot = float(np.sum((y - y.mean()) ** 2))
    r_squared = 1.0 - ss_res / ss_tot if ss_tot > 0 else 0.0

    return beta, r_squared


def fit_degradation_model(training: List[TrainingRecord]) -> Optional[TrainedModel]:
    """
    Train the degradation model.

    Insufficient data and numerical failures are reported through the log
    and yield None (absent model) instead of raising.

    Args:
        training: Training samples

    Returns:
        TrainedModel, or None when no usable fit exists
    """
    if len(training) < MIN_TRAINING_ROWS:
        logger.warning(
            f"Insufficient training data: {len(training)} rows, "
            f"need at least {MIN_TRAINING_ROWS}. Model not trained."
        )
        return None

    y, X = to_arrays(training)

    try:
        beta, r_squared = ols_fit(y, X)
    except RegressionError as e:
        logger.error(f"Regression fit failed, model not trained: {e}")
        return None

    model = TrainedModel(
        coefficients=tuple(float(b) for b in beta),
        num_samples=len(training),
        r_squared=r_squared,
        trained_at=datetime.now(timezone.utc),
    )

    logger.info(
        f"Model trained on {model.num_samples} rows: "
        f"intercept={beta[0]:.4f}, days={beta[1]:.6f}, "
        f"trim={beta[2]:.4f}, displacement={beta[3]:.6f}, R2={r_squared:.3f}"
    )
    return model
