"""Unit tests for cell-level parsing helpers."""

from datetime import date, datetime

from hullperf.data.parsing import (
    parse_event_date,
    parse_us_date,
    safe_float,
    safe_int,
    safe_str,
)


class TestSafeFloat:
    def test_numeric_text(self):
        assert safe_float("12.5") == 12.5
        assert safe_float(" 3 ") == 3.0

    def test_number_passthrough(self):
        assert safe_float(42) == 42.0

    def test_null_tokens_return_none(self):
        for token in ("", "  ", "nan", "NaN", "n/a", "-", "null", "None"):
            assert safe_float(token) is None

    def test_nan_and_inf_return_none(self):
        assert safe_float(float("nan")) is None
        assert safe_float("inf") is None
        assert safe_float(float("-inf")) is None

    def test_garbage_returns_none(self):
        assert safe_float("abc") is None
        assert safe_float(None) is None


class TestSafeInt:
    def test_integer_text(self):
        assert safe_int("20") == 20

    def test_integral_float_text(self):
        assert safe_int("52.0") == 52

    def test_fractional_rejected(self):
        assert safe_int("3.5") is None

    def test_empty(self):
        assert safe_int("") is None


class TestSafeStr:
    def test_strips(self):
        assert safe_str("  HFO ") == "HFO"

    def test_empty_and_nan(self):
        assert safe_str("   ") is None
        assert safe_str(float("nan")) is None
        assert safe_str(None) is None


class TestParseUsDate:
    def test_month_first(self):
        assert parse_us_date("11/29/2025") == date(2025, 11, 29)
        assert parse_us_date("6/1/2026") == date(2026, 6, 1)

    def test_day_first_rejected(self):
        assert parse_us_date("29/11/2025") is None

    def test_malformed(self):
        assert parse_us_date("2025-11-29") is None
        assert parse_us_date("not a date") is None
        assert parse_us_date("") is None
        assert parse_us_date(None) is None


class TestParseEventDate:
    def test_timestamp_text(self):
        assert parse_event_date("2025-12-02 14:30:00") == date(2025, 12, 2)

    def test_date_only_text(self):
        assert parse_event_date("2025-12-02") == date(2025, 12, 2)

    def test_date_objects(self):
        assert parse_event_date(datetime(2025, 12, 2, 8, 0)) == date(2025, 12, 2)
        assert parse_event_date(date(2025, 12, 2)) == date(2025, 12, 2)

    def test_unparseable(self):
        assert parse_event_date("12/02/2025 14:30") is None
        assert parse_event_date("2025-13") is None
        assert parse_event_date(None) is None
