"""
Per-vessel lookup maps built from the parsed exports.

All maps are keyed by the normalized vessel name.
"""

import logging
from datetime import date
from typing import Dict, Iterable, Optional

from .identity import normalize
from .records import CoatingRecord, DockingRecord, ShipDetail

logger = logging.getLogger(__name__)


def build_last_cleaning_map(
    dockings: Iterable[DockingRecord],
    as_of: Optional[date] = None,
) -> Dict[str, date]:
    """
    Most recent docking date per vessel.

    A dry-docking is treated as a full hull cleaning. Dockings scheduled
    after ``as_of`` are ignored.
    """
    last_cleaning: Dict[str, date] = {}
    for record in dockings:
        key = normalize(record.ship_name)
        if not key:
            continue
        if as_of is not None and record.docking_date > as_of:
            continue
        existing = last_cleaning.get(key)
        if existing is None or record.docking_date > existing:
            last_cleaning[key] = record.docking_date

    logger.info(f"Last cleaning dates for {len(last_cleaning)} vessels")
    return last_cleaning


def build_coating_map(coatings: Iterable[CoatingRecord]) -> Dict[str, CoatingRecord]:
    """Most recently applied coating per vessel."""
    latest: Dict[str, CoatingRecord] = {}
    for record in coatings:
        key = normalize(record.ship_name)
        if not key:
            continue
        existing = latest.get(key)
        if existing is None or record.application_date > existing.application_date:
            latest[key] = record

    logger.info(f"Coating records for {len(latest)} vessels")
    return latest


def build_ship_detail_map(details: Iterable[ShipDetail]) -> Dict[str, ShipDetail]:
    """Ship particulars per vessel; later rows replace earlier ones."""
    by_vessel: Dict[str, ShipDetail] = {}
    for detail in details:
        key = normalize(detail.ship_name)
        if key:
            by_vessel[key] = detail

    logger.info(f"Ship details for {len(by_vessel)} vessels")
    return by_vessel
