"""
Thread-safe model state.

Training builds a complete ModelSnapshot and swaps it into the store in
one reference replacement. Prediction calls read the current snapshot
once and work only on that value, so a retrain running concurrently can
never expose a half-updated model to a reader.
"""
import threading
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .training.baseline import FALLBACK_CFI_TON_PER_DAY
from .training.regression import TrainedModel

logger = logging.getLogger(__name__)


def _frozen(mapping: Optional[Mapping]) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class ModelSnapshot:
    """
    Trained model plus the per-vessel lookups it was trained with.

    All mappings are keyed by normalized vessel name and are read-only.
    """
    model: Optional[TrainedModel] = None
    last_cleaning: Mapping[str, date] = field(default_factory=lambda: _frozen(None))
    cfi_clean: Mapping[str, float] = field(default_factory=lambda: _frozen(None))
    ship_class: Mapping[str, str] = field(default_factory=lambda: _frozen(None))
    coating_period: Mapping[str, int] = field(default_factory=lambda: _frozen(None))
    fleet_cfi_clean: float = FALLBACK_CFI_TON_PER_DAY
    reference_date: Optional[date] = None
    trained_at: Optional[datetime] = None

    @classmethod
    def build(
        cls,
        model: Optional[TrainedModel],
        last_cleaning: Mapping[str, date],
        cfi_clean: Mapping[str, float],
        ship_class: Mapping[str, str],
        coating_period: Mapping[str, int],
        fleet_cfi_clean: float = FALLBACK_CFI_TON_PER_DAY,
        reference_date: Optional[date] = None,
        trained_at: Optional[datetime] = None,
    ) -> "ModelSnapshot":
        """Copy the given mappings into read-only views."""
        return cls(
            model=model,
            last_cleaning=_frozen(last_cleaning),
            cfi_clean=_frozen(cfi_clean),
            ship_class=_frozen(ship_class),
            coating_period=_frozen(coating_period),
            fleet_cfi_clean=fleet_cfi_clean,
            reference_date=reference_date,
            trained_at=trained_at,
        )

    @classmethod
    def empty(cls) -> "ModelSnapshot":
        """Snapshot before any training: no model, no vessels."""
        return cls()

    @property
    def is_trained(self) -> bool:
        return self.model is not None

    def vessels(self):
        """Sorted keys of every vessel known to any lookup."""
        keys = set(self.last_cleaning) | set(self.cfi_clean) | set(self.ship_class) | set(self.coating_period)
        return sorted(keys)

    def summary(self) -> Dict[str, Any]:
        return {
            'trained': self.is_trained,
            'num_samples': self.model.num_samples if self.model else 0,
            'vessels': len(self.vessels()),
            'fleet_cfi_clean': self.fleet_cfi_clean,
            'reference_date': self.reference_date.isoformat() if self.reference_date else None,
            'trained_at': self.trained_at.isoformat() if self.trained_at else None,
        }


class SnapshotStore:
    """
    Holder of the current ModelSnapshot.

    Usage:
        store = SnapshotStore()
        store.replace(new_snapshot)   # after training
        snapshot = store.current()    # once per prediction
    """

    def __init__(self, initial: Optional[ModelSnapshot] = None):
        self._lock = threading.RLock()
        self._snapshot = initial or ModelSnapshot.empty()

    def current(self) -> ModelSnapshot:
        """Get the current snapshot (thread-safe read)."""
        with self._lock:
            return self._snapshot

    def replace(self, snapshot: ModelSnapshot) -> ModelSnapshot:
        """
        Install a new snapshot atomically.

        Returns:
            The snapshot that was replaced
        """
        with self._lock:
            previous = self._snapshot
            self._snapshot = snapshot

        logger.info(f"Model snapshot replaced: {snapshot.summary()}")
        return previous
