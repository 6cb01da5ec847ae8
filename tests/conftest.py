"""
Shared pytest fixtures for HULLPERF tests.

Fleet exports are written to tmp_path by the builders in fleet_exports.
"""

from datetime import date

import pytest

from hullperf.config import Settings
from hullperf.metrics import metrics

from fleet_exports import AS_OF, degrading_sessions, event_row, us_date, write_fleet


@pytest.fixture(autouse=True)
def reset_metrics():
    """Isolate the global metrics collector between tests."""
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at an empty tmp data directory."""
    return Settings(data_dir=str(tmp_path), reference_date=AS_OF)


@pytest.fixture
def fleet_dir(tmp_path):
    """
    Small fleet of three vessels plus noise rows.

    - BRUNO LIMA: Suezmax, cleaned 2025-11-29, 20-week coating, clean-window data
    - ROMULO ALMEIDA: Aframax, cleaned 2025-10-01 (accented / double-spaced
      in the events export), 150-week coating, clean-window data
    - CARLOS DRUMMOND: Gaseiro, cleaned 2025-09-01, no coating, no clean-window data
    - MARIA QUITERIA: ship details only, no docking
    """
    bruno_cleaning = date(2025, 11, 29)
    romulo_cleaning = date(2025, 10, 1)
    carlos_cleaning = date(2025, 9, 1)

    bruno_events, bruno_cons = degrading_sessions(
        "BRUNO LIMA", bruno_cleaning, [3, 5, 7, 12, 20, 28, 35, 42],
        base_daily=30.0, rate=0.0004, ship_class="Suezmax", start_id=1000,
    )
    romulo_events, romulo_cons = degrading_sessions(
        "Rômulo  Almeida", romulo_cleaning, [4, 6, 30, 55, 80, 100],
        base_daily=40.0, rate=0.0003, ship_class="Aframax", start_id=2000,
    )
    carlos_events, carlos_cons = degrading_sessions(
        "Carlos Drummond", carlos_cleaning, [15, 45, 90],
        base_daily=20.0, rate=0.0005, ship_class="Gaseiro", start_id=3000,
    )

    noise_events = [
        # no consumption record
        event_row(9001, "BRUNO LIMA", date(2025, 12, 20)),
        # idle: speed below 1 kt
        event_row(9002, "BRUNO LIMA", date(2025, 12, 21), speed=0.5),
        # unparseable speed
        event_row(9003, "BRUNO LIMA", date(2025, 12, 22), speed="abc"),
        # before the last cleaning
        event_row(9004, "BRUNO LIMA", date(2025, 11, 1)),
    ]
    noise_consumption = [
        ["9002", "3.0", "HFO"],
        ["9003", "30.0", "HFO"],
        ["9004", "30.0", "HFO"],
        ["9005", "-1", "HFO"],
    ]

    dockings = [
        ["BRUNO LIMA", us_date(bruno_cleaning), "Docagem"],
        ["Bruno Lima", "3/10/2023", "Docagem"],
        ["ROMULO ALMEIDA", us_date(romulo_cleaning), "Docagem"],
        ["Romulo Almeida", "6/1/2026", "Docagem"],  # after AS_OF
        ["CARLOS DRUMMOND", us_date(carlos_cleaning), "Docagem"],
        ["", "not a date", ""],
    ]
    coatings = [
        ["BL", "Bruno Lima", "Suezmax", "Petroleiro", "1", "12/1/2025", "20", "4"],
        ["BL", "Bruno Lima", "Suezmax", "Petroleiro", "1", "1/15/2023", "130", "4"],
        ["RA", "Rômulo Almeida", "Aframax", "Petroleiro", "2", "10/2/2025", "150", "6"],
    ]
    details = [
        ["Bruno Lima", "Suezmax", "Petroleiro", "157000", "274.2", "48", "17", "23.1"],
        ["Romulo Almeida", "Aframax", "Petroleiro", "114000", "249.9", "44", "15", "21"],
        ["Carlos Drummond", "Gaseiro", "GLP", "7000", "117.6", "19.2", "7", "10"],
        ["Maria Quiteria", "Product Carrier", "Derivados", "48000", "183", "32.2", "12", "18"],
        ["Navio Sem Porte", "Suezmax", "Petroleiro", "n/a", "", "", "", ""],
    ]

    return write_fleet(
        tmp_path,
        dockings=dockings,
        coatings=coatings,
        details=details,
        events=bruno_events + romulo_events + carlos_events + noise_events,
        consumption=bruno_cons + romulo_cons + carlos_cons + noise_consumption,
    )


@pytest.fixture
def sparse_fleet_dir(tmp_path):
    """One vessel with exactly four usable sessions."""
    cleaning = date(2025, 11, 29)
    events, consumption = degrading_sessions(
        "BRUNO LIMA", cleaning, [3, 5, 20, 40],
        base_daily=30.0, rate=0.0004, ship_class="Suezmax", start_id=100,
    )
    return write_fleet(
        tmp_path,
        dockings=[["BRUNO LIMA", us_date(cleaning), "Docagem"]],
        details=[["Bruno Lima", "Suezmax", "Petroleiro", "157000", "274.2", "48", "17", "23.1"]],
        events=events,
        consumption=consumption,
    )
