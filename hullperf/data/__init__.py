"""Fleet data ingestion: records, identity normalization and CSV loaders."""

from .identity import normalize
from .loaders import FleetDataLoader
from .records import (
    CoatingRecord,
    ConsumptionRecord,
    DockingRecord,
    NavigationEvent,
    ShipDetail,
)

__all__ = [
    "normalize",
    "FleetDataLoader",
    "CoatingRecord",
    "ConsumptionRecord",
    "DockingRecord",
    "NavigationEvent",
    "ShipDetail",
]
