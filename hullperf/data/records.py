"""
Input records read from the fleet exports.

Navigation and consumption rows keep their numeric fields as raw text:
the consolidator parses them and drops the rows that fail, so one bad
cell never aborts a batch. Docking, coating and ship-detail rows are
parsed by the loaders because only their latest entry per vessel matters.
"""

from dataclasses import dataclass, asdict
from datetime import date
from typing import Dict, Optional


@dataclass(frozen=True)
class NavigationEvent:
    """One navigation session as exported by the voyage reporting system."""

    session_id: str
    ship_name: str
    ship_class: Optional[str] = None
    event_name: Optional[str] = None

    # Timestamps as exported ("yyyy-MM-dd HH:mm:ss")
    start_gmt_date: Optional[str] = None
    end_gmt_date: Optional[str] = None

    # Raw numeric fields
    duration: Optional[str] = None  # hours
    distance: Optional[str] = None
    aft_draft: Optional[str] = None
    fwd_draft: Optional[str] = None
    mid_draft: Optional[str] = None
    trim: Optional[str] = None
    displacement: Optional[str] = None
    beaufort_scale: Optional[str] = None
    sea_condition: Optional[str] = None
    speed: Optional[str] = None
    speed_gps: Optional[str] = None

    # Position
    port: Optional[str] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None


@dataclass(frozen=True)
class ConsumptionRecord:
    """Fuel consumed during one navigation session."""

    session_id: str
    consumed_quantity: Optional[str] = None  # tons
    description: Optional[str] = None


@dataclass(frozen=True)
class DockingRecord:
    """A dry-docking (full hull cleaning) event."""

    ship_name: str
    docking_date: date
    docking_type: Optional[str] = None

    def to_dict(self) -> Dict:
        d = asdict(self)
        d['docking_date'] = self.docking_date.isoformat()
        return d


@dataclass(frozen=True)
class CoatingRecord:
    """Antifouling coating application."""

    ship_name: str
    application_date: date
    base_period_weeks: int
    max_accumulated_stoppage: Optional[int] = None
    code: Optional[str] = None
    class_type: Optional[str] = None
    cargo_type: Optional[str] = None
    class_number: Optional[str] = None

    def to_dict(self) -> Dict:
        d = asdict(self)
        d['application_date'] = self.application_date.isoformat()
        return d


@dataclass(frozen=True)
class ShipDetail:
    """Static particulars of a vessel."""

    ship_name: str
    ship_class: str
    cargo_type: Optional[str] = None
    dwt: float = 0.0  # deadweight tonnage
    length_m: Optional[float] = None
    beam_m: Optional[float] = None
    draft_m: Optional[float] = None
    depth_m: Optional[float] = None
