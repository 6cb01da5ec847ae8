"""Unit tests for navigation / consumption consolidation."""

import pytest

from hullperf.data.records import ConsumptionRecord, NavigationEvent
from hullperf.metrics import metrics
from hullperf.training.consolidation import (
    ConsolidatedRecord,
    build_consumption_map,
    consolidate,
)


def _event(session_id="1", ship_name="Bruno Lima", **overrides):
    fields = dict(
        start_gmt_date="2025-12-05 06:00:00",
        duration="24",
        speed="12.5",
        aft_draft="10.2",
        fwd_draft="9.4",
        displacement="81000",
        beaufort_scale="3",
        ship_class="Suezmax",
        event_name="NAVEGACAO",
    )
    fields.update(overrides)
    return NavigationEvent(session_id=session_id, ship_name=ship_name, **fields)


class TestConsumptionMap:
    def test_positive_quantities_kept(self):
        records = [ConsumptionRecord("1", "30.5"), ConsumptionRecord("2", " 12 ")]
        assert build_consumption_map(records) == {"1": 30.5, "2": 12.0}

    def test_non_positive_and_unparseable_dropped(self):
        records = [
            ConsumptionRecord("1", "0"),
            ConsumptionRecord("2", "-4.0"),
            ConsumptionRecord("3", "abc"),
            ConsumptionRecord("4", None),
        ]
        assert build_consumption_map(records) == {}


class TestConsolidate:
    def test_joined_record(self):
        records = consolidate([_event()], [ConsumptionRecord("1", "30.0")])

        assert len(records) == 1
        rec = records[0]
        assert rec.ship_key == "BRUNO LIMA"
        assert rec.consumed_quantity == 30.0
        assert rec.beaufort_scale == 3
        assert rec.trim == pytest.approx(0.8)
        assert rec.daily_consumption == pytest.approx(30.0)

    def test_daily_consumption_scales_by_duration(self):
        rec = consolidate([_event(duration="12")], [ConsumptionRecord("1", "15")])[0]
        assert rec.daily_consumption == pytest.approx(30.0)

    def test_events_without_consumption_dropped(self):
        assert consolidate([_event(session_id="7")], [ConsumptionRecord("1", "30")]) == []

    @pytest.mark.parametrize("field", [
        "speed", "aft_draft", "fwd_draft", "displacement", "duration", "beaufort_scale",
    ])
    def test_unparseable_numeric_field_drops_row(self, field):
        events = [_event(session_id="1", **{field: "n/a"}), _event(session_id="2")]
        consumption = [ConsumptionRecord("1", "30"), ConsumptionRecord("2", "30")]

        records = consolidate(events, consumption)
        assert [r.session_id for r in records] == ["2"]

    @pytest.mark.parametrize("speed,duration", [
        ("1.0", "24"),   # speed not above 1 kt
        ("0.3", "24"),
        ("12", "1.0"),   # duration not above 1 h
        ("12", "0.5"),
    ])
    def test_idle_sessions_dropped(self, speed, duration):
        events = [_event(speed=speed, duration=duration)]
        assert consolidate(events, [ConsumptionRecord("1", "30")]) == []

    def test_invariant_speed_and_duration_above_one(self):
        events = [
            _event(session_id=str(i), speed=str(s), duration=str(d))
            for i, (s, d) in enumerate([(0.5, 24), (1.5, 1.5), (12, 0.9), (14, 48)])
        ]
        consumption = [ConsumptionRecord(str(i), "20") for i in range(4)]

        for rec in consolidate(events, consumption):
            assert rec.speed > 1.0
            assert rec.duration > 1.0

    def test_counters(self):
        events = [_event(session_id="1"), _event(session_id="2", speed="0.2"), _event(session_id="3")]
        consolidate(events, [ConsumptionRecord("1", "30"), ConsumptionRecord("2", "30")])

        assert metrics.get_counter("sessions_consolidated") == 1
        assert metrics.get_counter("sessions_skipped") == 2

    def test_to_dict(self):
        rec = consolidate([_event()], [ConsumptionRecord("1", "30.0")])[0]
        d = rec.to_dict()
        assert isinstance(rec, ConsolidatedRecord)
        assert d["session_id"] == "1"
        assert d["ship_key"] == "BRUNO LIMA"
