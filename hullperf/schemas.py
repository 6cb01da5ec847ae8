"""Wire schemas for training reports and cleaning suggestions."""

import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .prediction.simulator import CleaningSuggestion, DailyPrediction
from .service import TrainingReport


class DailyPredictionModel(BaseModel):
    """Projected hull state for one day."""
    date: datetime.date
    hpi: float = Field(..., ge=1.0, description="Hull Performance Index")
    drag_percent: float = Field(..., ge=0, description="Drag increase over the clean hull (%)")
    extra_fuel_ton_per_day: float = Field(..., ge=0, description="Fuel above clean-hull consumption (t/day)")
    estimated_coverage_percent: float = Field(..., ge=0, le=100, description="Estimated biofouling coverage (%)")

    @classmethod
    def from_domain(cls, prediction: DailyPrediction) -> "DailyPredictionModel":
        return cls(
            date=prediction.date,
            hpi=prediction.hpi,
            drag_percent=prediction.drag_percent,
            extra_fuel_ton_per_day=prediction.extra_fuel_ton_per_day,
            estimated_coverage_percent=prediction.estimated_coverage_percent,
        )


class CleaningSuggestionModel(BaseModel):
    """Hull cleaning recommendation for one vessel."""
    vessel_id: str
    last_cleaning_date: Optional[datetime.date] = None
    ideal_cleaning_date: Optional[datetime.date] = None
    days_to_intervention: Optional[int] = None
    justification: str
    status: str
    biofouling_level: int = Field(..., ge=0, le=4)
    cfi_clean_ton_per_day: float = Field(..., gt=0, description="Clean-hull daily consumption (t/day)")
    max_extra_fuel_ton_per_day: float = Field(..., ge=0)
    threshold: Optional[float] = Field(None, description="HPI at which cleaning is due")
    predictions: List[DailyPredictionModel] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, suggestion: CleaningSuggestion) -> "CleaningSuggestionModel":
        return cls(
            vessel_id=suggestion.vessel_id,
            last_cleaning_date=suggestion.last_cleaning_date,
            ideal_cleaning_date=suggestion.ideal_cleaning_date,
            days_to_intervention=suggestion.days_to_intervention,
            justification=suggestion.justification,
            status=suggestion.status,
            biofouling_level=suggestion.biofouling_level,
            cfi_clean_ton_per_day=suggestion.cfi_clean_ton_per_day,
            max_extra_fuel_ton_per_day=suggestion.max_extra_fuel_ton_per_day,
            threshold=suggestion.threshold,
            predictions=[DailyPredictionModel.from_domain(p) for p in suggestion.predictions],
        )


class TrainingReportModel(BaseModel):
    """Summary of a training run."""
    trained: bool
    reference_date: datetime.date
    num_sessions: int = Field(0, ge=0)
    num_training_rows: int = Field(0, ge=0)
    num_vessels: int = Field(0, ge=0)
    fleet_cfi_clean: float = Field(..., gt=0)
    coefficients: Optional[Dict[str, float]] = None
    r_squared: Optional[float] = None
    skipped_rows: Dict[str, int] = Field(default_factory=dict)
    error: Optional[str] = None

    @classmethod
    def from_domain(cls, report: TrainingReport) -> "TrainingReportModel":
        return cls(
            trained=report.trained,
            reference_date=report.reference_date,
            num_sessions=report.num_sessions,
            num_training_rows=report.num_training_rows,
            num_vessels=report.num_vessels,
            fleet_cfi_clean=report.fleet_cfi_clean,
            coefficients=report.coefficients,
            r_squared=report.r_squared,
            skipped_rows=report.skipped_rows,
            error=report.error,
        )
