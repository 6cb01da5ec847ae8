"""
Hull performance service.

Entry point for the surrounding system (HTTP layer, schedulers, CLI):

- train_model(): batch pipeline, loaders -> consolidation -> CFI_clean
  baseline -> features -> OLS, producing one immutable ModelSnapshot
- per-vessel lookups over the current snapshot
- suggest_cleaning_date(): forward simulation for one vessel

Usage:
    service = HullPerformanceService()
    report = service.train_model()
    suggestion = service.suggest_cleaning_date("Bruno Lima")
    print(suggestion.ideal_cleaning_date, suggestion.justification)
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from .config import Settings, get_settings
from .data.identity import normalize
from .data.loaders import FleetDataLoader
from .data.lookups import build_coating_map, build_last_cleaning_map, build_ship_detail_map
from .metrics import metrics, timed
from .prediction.coefficients import sanitize_coefficients
from .prediction.simulator import CleaningSuggestion, DegradationSimulator, fallback_suggestion
from .prediction.thresholds import DEFAULT_COATING_PERIOD_WEEKS, UNKNOWN_CLASS, determine_threshold
from .state import ModelSnapshot, SnapshotStore
from .training.baseline import FALLBACK_CFI_TON_PER_DAY, estimate_cfi_clean
from .training.consolidation import consolidate
from .training.features import build_training_records
from .training.regression import fit_degradation_model

logger = logging.getLogger(__name__)

DOCKING_NOT_FOUND = "Last docking date not found for vessel."
MODEL_UNAVAILABLE = "Regression model not trained or unavailable."


@dataclass
class TrainingReport:
    """Outcome of one train_model() run."""

    trained: bool
    reference_date: date
    num_sessions: int = 0
    num_training_rows: int = 0
    num_vessels: int = 0
    fleet_cfi_clean: float = FALLBACK_CFI_TON_PER_DAY
    coefficients: Optional[Dict[str, float]] = None
    r_squared: Optional[float] = None
    skipped_rows: Dict[str, int] = field(default_factory=dict)
    error: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "trained": self.trained,
            "reference_date": self.reference_date.isoformat(),
            "num_sessions": self.num_sessions,
            "num_training_rows": self.num_training_rows,
            "num_vessels": self.num_vessels,
            "fleet_cfi_clean": round(self.fleet_cfi_clean, 4),
            "coefficients": self.coefficients,
            "r_squared": self.r_squared,
            "skipped_rows": dict(self.skipped_rows),
            "error": self.error,
        }


class HullPerformanceService:
    """
    Training and cleaning-date prediction over a shared model snapshot.

    Safe for concurrent use: train_model() swaps in a new snapshot
    atomically and each prediction reads the snapshot exactly once.
    """

    def __init__(
        self,
        loader: Optional[FleetDataLoader] = None,
        settings: Optional[Settings] = None,
        store: Optional[SnapshotStore] = None,
        simulator: Optional[DegradationSimulator] = None,
    ):
        self.settings = settings or get_settings()
        self.loader = loader or FleetDataLoader.from_settings(self.settings)
        self.store = store or SnapshotStore()
        self.simulator = simulator or DegradationSimulator(horizon_days=self.settings.projection_days)

    @property
    def snapshot(self) -> ModelSnapshot:
        return self.store.current()

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    @timed("train_model")
    def train_model(self, as_of: Optional[date] = None) -> TrainingReport:
        """
        Run the batch pipeline and replace the current snapshot.

        Idempotent: the same exports and reference date produce the same
        snapshot. Bad rows and insufficient data never raise; a missing
        export leaves an untrained snapshot in place.

        Args:
            as_of: Reference date; dockings after it are ignored.
                Defaults to the configured reference date or today.

        Returns:
            TrainingReport
        """
        as_of = as_of or self.settings.today()
        logger.info(f"Training degradation model (reference date {as_of})")

        try:
            with metrics.timer("load_exports"):
                dockings = self.loader.load_docking_records()
                coatings = self.loader.load_coating_records()
                details = self.loader.load_ship_details()
                events = self.loader.load_navigation_events()
                consumption = self.loader.load_consumption_records()
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Training aborted, fleet exports unavailable: {e}")
            self.store.replace(ModelSnapshot.build(
                model=None, last_cleaning={}, cfi_clean={}, ship_class={}, coating_period={},
                reference_date=as_of, trained_at=datetime.now(timezone.utc),
            ))
            return TrainingReport(trained=False, reference_date=as_of, error=str(e))

        last_cleaning = build_last_cleaning_map(dockings, as_of)
        coating_period = {
            key: record.base_period_weeks
            for key, record in build_coating_map(coatings).items()
        }
        ship_class = {
            key: detail.ship_class or UNKNOWN_CLASS
            for key, detail in build_ship_detail_map(details).items()
        }

        with metrics.timer("consolidation"):
            records = consolidate(events, consumption)

        with metrics.timer("baseline"):
            baseline = estimate_cfi_clean(records, last_cleaning)

        with metrics.timer("features"):
            training = build_training_records(records, last_cleaning, baseline.cfi_for)

        with metrics.timer("regression"):
            model = fit_degradation_model(training)

        snapshot = ModelSnapshot.build(
            model=model,
            last_cleaning=last_cleaning,
            cfi_clean=baseline.cfi_clean,
            ship_class=ship_class,
            coating_period=coating_period,
            fleet_cfi_clean=baseline.fleet_cfi_clean,
            reference_date=as_of,
            trained_at=model.trained_at if model else datetime.now(timezone.utc),
        )
        self.store.replace(snapshot)

        metrics.increment("training_runs")
        metrics.set_gauge("training_rows", len(training))
        metrics.set_gauge("fleet_cfi_clean", baseline.fleet_cfi_clean)
        metrics.set_gauge("vessels", len(snapshot.vessels()))

        return TrainingReport(
            trained=model is not None,
            reference_date=as_of,
            num_sessions=len(records),
            num_training_rows=len(training),
            num_vessels=len(snapshot.vessels()),
            fleet_cfi_clean=baseline.fleet_cfi_clean,
            coefficients=_coefficient_dict(model.coefficients) if model else None,
            r_squared=model.r_squared if model else None,
            skipped_rows=dict(self.loader.skipped),
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_last_cleaning_date(self, vessel_id: str) -> Optional[date]:
        return self.snapshot.last_cleaning.get(normalize(vessel_id))

    def get_cfi_clean_ton_per_day(self, vessel_id: str) -> float:
        """CFI_clean of the vessel, or the fallback rate when it has no clean-window data."""
        return self.snapshot.cfi_clean.get(normalize(vessel_id), FALLBACK_CFI_TON_PER_DAY)

    def get_ship_class_type(self, vessel_id: str) -> str:
        return self.snapshot.ship_class.get(normalize(vessel_id), UNKNOWN_CLASS)

    def get_coating_base_period(self, vessel_id: str) -> int:
        """Coating base verification period in weeks (52 when no coating is on record)."""
        return self.snapshot.coating_period.get(normalize(vessel_id), DEFAULT_COATING_PERIOD_WEEKS)

    def determine_threshold(self, vessel_id: str) -> float:
        return _threshold_for(self.snapshot, normalize(vessel_id))

    def list_vessels(self) -> List[str]:
        """Normalized keys of every vessel seen by the last training run."""
        return self.snapshot.vessels()

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------

    def suggest_cleaning_date(self, vessel_id: str, today: Optional[date] = None) -> CleaningSuggestion:
        """
        Recommend a hull cleaning date for one vessel.

        Never raises: a missing docking date, an untrained model or an
        unexpected failure all produce a fallback suggestion with an
        empty projection and a justification.

        Args:
            vessel_id: Vessel name in any spelling variant
            today: Simulation start (defaults to the reference date the
                model was trained as of)

        Returns:
            CleaningSuggestion
        """
        snapshot = self.store.current()
        return self._suggest_from(snapshot, vessel_id, today or self._default_today(snapshot))

    def suggest_fleet(self, today: Optional[date] = None) -> List[CleaningSuggestion]:
        """One suggestion per known vessel, most urgent first."""
        snapshot = self.store.current()
        today = today or self._default_today(snapshot)
        suggestions = [self._suggest_from(snapshot, v, today) for v in snapshot.vessels()]
        suggestions.sort(key=lambda s: (
            s.ideal_cleaning_date is None,
            s.ideal_cleaning_date or date.max,
            s.vessel_id,
        ))
        return suggestions

    def _default_today(self, snapshot: ModelSnapshot) -> date:
        return snapshot.reference_date or self.settings.today()

    def _suggest_from(self, snapshot: ModelSnapshot, vessel_id: str, today: date) -> CleaningSuggestion:
        metrics.increment("suggestions_served")
        try:
            return _suggest(snapshot, self.simulator, vessel_id, today)
        except Exception as e:
            logger.exception(f"Cleaning suggestion failed for {vessel_id!r}")
            metrics.increment("suggestion_errors")
            return fallback_suggestion(
                vessel_id,
                f"Cleaning date could not be computed: {e}",
                FALLBACK_CFI_TON_PER_DAY,
            )


def _coefficient_dict(coefficients) -> Dict[str, float]:
    names = ("intercept", "beta_days", "beta_trim", "beta_displacement")
    return {name: float(c) for name, c in zip(names, coefficients)}


def _threshold_for(snapshot: ModelSnapshot, key: str) -> float:
    return determine_threshold(
        snapshot.ship_class.get(key, UNKNOWN_CLASS),
        snapshot.coating_period.get(key, DEFAULT_COATING_PERIOD_WEEKS),
    )


def _suggest(
    snapshot: ModelSnapshot,
    simulator: DegradationSimulator,
    vessel_id: str,
    today: date,
) -> CleaningSuggestion:
    """Pure prediction over one snapshot."""
    key = normalize(vessel_id)
    cfi_clean = snapshot.cfi_clean.get(key, FALLBACK_CFI_TON_PER_DAY)
    threshold = _threshold_for(snapshot, key)

    last_cleaning = snapshot.last_cleaning.get(key)

    if snapshot.model is None:
        logger.warning(f"{vessel_id}: model not trained, returning fallback suggestion")
        return fallback_suggestion(
            vessel_id, MODEL_UNAVAILABLE, cfi_clean,
            last_cleaning_date=last_cleaning, threshold=threshold,
        )

    if last_cleaning is None:
        logger.info(f"{vessel_id}: no docking date on record")
        return fallback_suggestion(vessel_id, DOCKING_NOT_FOUND, cfi_clean, threshold=threshold)

    coefficients = sanitize_coefficients(snapshot.model.coefficients)
    return simulator.simulate(
        vessel_id=vessel_id,
        coefficients=coefficients,
        last_cleaning_date=last_cleaning,
        cfi_clean_ton_per_day=cfi_clean,
        threshold=threshold,
        today=today,
    )
