"""
Hull degradation simulator.

Projects HPI day by day from today over a fixed horizon using the
sanitized linear model, derives the fouling metrics of every day and
recommends a cleaning date: the first projected day on which HPI reaches
the vessel's dynamic threshold.

Loading terms (trim, displacement) are evaluated at zero for future
days: the projection assumes neutral loading from today on.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional

from .coefficients import ModelCoefficients
from .fouling import CLEAN_HPI, classify_fouling, compute_metrics

logger = logging.getLogger(__name__)

# Days projected after today
PROJECTION_DAYS = 180


@dataclass(frozen=True)
class DailyPrediction:
    """Projected hull state for one day."""

    date: date
    hpi: float
    drag_percent: float
    extra_fuel_ton_per_day: float
    estimated_coverage_percent: float

    def to_dict(self) -> Dict:
        return {
            "date": self.date.isoformat(),
            "hpi": self.hpi,
            "drag_percent": self.drag_percent,
            "extra_fuel_ton_per_day": self.extra_fuel_ton_per_day,
            "estimated_coverage_percent": self.estimated_coverage_percent,
        }


@dataclass
class CleaningSuggestion:
    """Cleaning recommendation for one vessel."""

    vessel_id: str
    last_cleaning_date: Optional[date]
    ideal_cleaning_date: Optional[date]
    days_to_intervention: Optional[int]
    justification: str
    status: str
    biofouling_level: int
    cfi_clean_ton_per_day: float
    max_extra_fuel_ton_per_day: float
    threshold: Optional[float] = None
    predictions: List[DailyPrediction] = field(default_factory=list)

    @property
    def current_hpi(self) -> float:
        return self.predictions[0].hpi if self.predictions else CLEAN_HPI

    def to_dict(self) -> Dict:
        return {
            "vessel_id": self.vessel_id,
            "last_cleaning_date": self.last_cleaning_date.isoformat() if self.last_cleaning_date else None,
            "ideal_cleaning_date": self.ideal_cleaning_date.isoformat() if self.ideal_cleaning_date else None,
            "days_to_intervention": self.days_to_intervention,
            "justification": self.justification,
            "status": self.status,
            "biofouling_level": self.biofouling_level,
            "cfi_clean_ton_per_day": self.cfi_clean_ton_per_day,
            "max_extra_fuel_ton_per_day": self.max_extra_fuel_ton_per_day,
            "threshold": self.threshold,
            "predictions": [p.to_dict() for p in self.predictions],
        }


def project_hpi(coefficients: ModelCoefficients, days_since_cleaning: int) -> float:
    """HPI on a given day after cleaning, never below the clean baseline."""
    return max(CLEAN_HPI, coefficients.hpi_at(days_since_cleaning))


def _prediction(day: date, hpi: float, cfi_clean: float) -> DailyPrediction:
    m = compute_metrics(hpi, cfi_clean)
    return DailyPrediction(
        date=day,
        hpi=hpi,
        drag_percent=m.drag_percent,
        extra_fuel_ton_per_day=m.extra_fuel_ton_per_day,
        estimated_coverage_percent=m.estimated_coverage_percent,
    )


def fallback_suggestion(
    vessel_id: str,
    reason: str,
    cfi_clean_ton_per_day: float,
    last_cleaning_date: Optional[date] = None,
    threshold: Optional[float] = None,
) -> CleaningSuggestion:
    """Well-formed suggestion for vessels that cannot be simulated."""
    level = classify_fouling(CLEAN_HPI, threshold if threshold is not None else float("inf"))
    return CleaningSuggestion(
        vessel_id=vessel_id,
        last_cleaning_date=last_cleaning_date,
        ideal_cleaning_date=None,
        days_to_intervention=None,
        justification=reason,
        status=level.label,
        biofouling_level=level.level,
        cfi_clean_ton_per_day=cfi_clean_ton_per_day,
        max_extra_fuel_ton_per_day=0.0,
        threshold=threshold,
        predictions=[],
    )


class DegradationSimulator:
    """
    Forward simulation of hull degradation for one vessel.

    Example usage:
        simulator = DegradationSimulator(horizon_days=180)
        suggestion = simulator.simulate(
            vessel_id="BRUNO LIMA",
            coefficients=sanitize_coefficients(model.coefficients),
            last_cleaning_date=date(2025, 11, 29),
            cfi_clean_ton_per_day=31.2,
            threshold=1.025,
            today=date(2026, 1, 15),
        )
        print(suggestion.ideal_cleaning_date)
    """

    def __init__(self, horizon_days: int = PROJECTION_DAYS):
        self.horizon_days = horizon_days

    def simulate(
        self,
        vessel_id: str,
        coefficients: ModelCoefficients,
        last_cleaning_date: date,
        cfi_clean_ton_per_day: float,
        threshold: float,
        today: date,
    ) -> CleaningSuggestion:
        """
        Project HPI from today and assemble the cleaning suggestion.

        The full horizon is always emitted, also after the threshold has
        been crossed, so the extra-fuel curve covers the cost of not
        cleaning.

        Returns:
            CleaningSuggestion with 1 + horizon_days predictions
        """
        days_since_cleaning = (today - last_cleaning_date).days

        initial_hpi = project_hpi(coefficients, days_since_cleaning)
        day_zero = _prediction(today, initial_hpi, cfi_clean_ton_per_day)

        predictions = [day_zero]
        max_extra_fuel = day_zero.extra_fuel_ton_per_day
        ideal_date: Optional[date] = None
        hpi = initial_hpi

        for d in range(days_since_cleaning + 1, days_since_cleaning + self.horizon_days + 1):
            day = last_cleaning_date + timedelta(days=d)
            hpi = project_hpi(coefficients, d)

            prediction = _prediction(day, hpi, cfi_clean_ton_per_day)
            predictions.append(prediction)
            max_extra_fuel = max(max_extra_fuel, prediction.extra_fuel_ton_per_day)

            if ideal_date is None and hpi >= threshold:
                ideal_date = day

        level = classify_fouling(initial_hpi, threshold)

        if ideal_date is not None:
            days_to_intervention = (ideal_date - today).days
            justification = (
                f"Projected HPI reaches the cleaning threshold of {threshold:.4f} "
                f"on {ideal_date.isoformat()} ({days_to_intervention} days from today)."
            )
        else:
            days_to_intervention = None
            justification = (
                f"Projected HPI ({hpi:.2f}) does not reach the cleaning threshold of "
                f"{threshold:.4f} within the {self.horizon_days}-day projection horizon."
            )

        logger.debug(
            f"{vessel_id}: HPI today {initial_hpi:.4f}, threshold {threshold:.4f}, "
            f"ideal cleaning {ideal_date}"
        )

        return CleaningSuggestion(
            vessel_id=vessel_id,
            last_cleaning_date=last_cleaning_date,
            ideal_cleaning_date=ideal_date,
            days_to_intervention=days_to_intervention,
            justification=justification,
            status=level.label,
            biofouling_level=level.level,
            cfi_clean_ton_per_day=cfi_clean_ton_per_day,
            max_extra_fuel_ton_per_day=max_extra_fuel,
            threshold=threshold,
            predictions=predictions,
        )
