"""
Navigation / consumption consolidation.

Joins navigation events with fuel consumption by session id and keeps
only propulsive sessions: while anchored or drifting the fuel burned is
not attributable to hull drag.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Optional

from ..data.identity import normalize
from ..data.parsing import safe_float, safe_int, safe_str
from ..data.records import ConsumptionRecord, NavigationEvent
from ..metrics import metrics

logger = logging.getLogger(__name__)

# Sessions at or below these values are treated as non-propulsive
MIN_SPEED_KTS = 1.0
MIN_DURATION_HOURS = 1.0


@dataclass(frozen=True)
class ConsolidatedRecord:
    """A navigation session joined with its consumption."""

    session_id: str
    ship_key: str  # normalized vessel name
    ship_class: Optional[str]
    event_name: Optional[str]
    start_gmt_date: Optional[str]
    consumed_quantity: float  # tons
    duration: float  # hours
    speed: float
    aft_draft: float
    fwd_draft: float
    displacement: float
    beaufort_scale: int

    @property
    def daily_consumption(self) -> float:
        """Consumption scaled to tons/day."""
        return self.consumed_quantity / (self.duration / 24.0)

    @property
    def trim(self) -> float:
        """Aft minus forward draft."""
        return self.aft_draft - self.fwd_draft

    def to_dict(self) -> Dict:
        return asdict(self)


def build_consumption_map(records: Iterable[ConsumptionRecord]) -> Dict[str, float]:
    """Session id -> consumed tons. Non-positive and unparseable quantities are dropped."""
    consumption: Dict[str, float] = {}
    for record in records:
        session_id = safe_str(record.session_id)
        quantity = safe_float(record.consumed_quantity)
        if session_id is None or quantity is None or quantity <= 0:
            continue
        consumption[session_id] = quantity

    logger.info(f"Consumption mapped for {len(consumption)} sessions")
    return consumption


def _parse_event(
    event: NavigationEvent,
    session_id: str,
    quantity: float,
) -> Optional[ConsolidatedRecord]:
    speed = safe_float(event.speed)
    aft_draft = safe_float(event.aft_draft)
    fwd_draft = safe_float(event.fwd_draft)
    displacement = safe_float(event.displacement)
    duration = safe_float(event.duration)
    beaufort = safe_int(event.beaufort_scale)

    if None in (speed, aft_draft, fwd_draft, displacement, duration, beaufort):
        return None

    return ConsolidatedRecord(
        session_id=session_id,
        ship_key=normalize(event.ship_name),
        ship_class=safe_str(event.ship_class),
        event_name=safe_str(event.event_name),
        start_gmt_date=safe_str(event.start_gmt_date),
        consumed_quantity=quantity,
        duration=duration,
        speed=speed,
        aft_draft=aft_draft,
        fwd_draft=fwd_draft,
        displacement=displacement,
        beaufort_scale=beaufort,
    )


def consolidate(
    events: Iterable[NavigationEvent],
    consumption: Iterable[ConsumptionRecord],
) -> List[ConsolidatedRecord]:
    """
    Join events with consumption into per-session records.

    Args:
        events: Navigation events (raw text fields)
        consumption: Consumption records (raw text fields)

    Returns:
        One record per propulsive session that has positive consumption
        and parseable numeric fields
    """
    consumption_map = build_consumption_map(consumption)

    consolidated: List[ConsolidatedRecord] = []
    unmatched = 0
    unparseable = 0
    idle = 0

    for event in events:
        session_id = safe_str(event.session_id)
        if session_id is None or session_id not in consumption_map:
            unmatched += 1
            continue

        record = _parse_event(event, session_id, consumption_map[session_id])
        if record is None:
            logger.debug(f"Session {session_id}: unparseable numeric fields")
            unparseable += 1
            continue

        if record.speed > MIN_SPEED_KTS and record.duration > MIN_DURATION_HOURS:
            consolidated.append(record)
        else:
            idle += 1

    metrics.increment("sessions_consolidated", len(consolidated))
    metrics.increment("sessions_skipped", unmatched + unparseable + idle)
    logger.info(
        f"Consolidated {len(consolidated)} sessions "
        f"(no consumption: {unmatched}, unparseable: {unparseable}, idle: {idle})"
    )
    return consolidated
