"""Unit tests for per-vessel cleaning thresholds."""

import pytest

from hullperf.prediction.thresholds import (
    DEFAULT_THRESHOLD,
    base_threshold,
    coating_adjustment,
    determine_threshold,
)


class TestBaseThreshold:
    @pytest.mark.parametrize("ship_class,expected", [
        ("SUEZMAX", 1.030),
        ("Suezmax", 1.030),
        ("aframax", 1.025),
        ("Product  Carrier", 1.020),
        ("Gaseiro", 1.028),
    ])
    def test_known_classes(self, ship_class, expected):
        assert base_threshold(ship_class) == expected

    @pytest.mark.parametrize("ship_class", ["VLCC", "UNKNOWN", "", None])
    def test_unknown_class_default(self, ship_class):
        assert base_threshold(ship_class) == DEFAULT_THRESHOLD == 1.0275


class TestCoatingAdjustment:
    @pytest.mark.parametrize("weeks,expected", [
        (20, -0.005),
        (35, -0.005),
        (36, 0.0),
        (52, 0.0),
        (119, 0.0),
        (120, 0.005),
        (150, 0.005),
        (None, 0.0),
    ])
    def test_bands(self, weeks, expected):
        assert coating_adjustment(weeks) == expected


class TestDetermineThreshold:
    def test_suezmax_standard_coating(self):
        assert determine_threshold("Suezmax", 20) == pytest.approx(1.025)

    def test_aframax_premium_coating(self):
        assert determine_threshold("AFRAMAX", 150) == pytest.approx(1.030)

    def test_default_coating_period(self):
        assert determine_threshold("Gaseiro", 52) == pytest.approx(1.028)

    def test_unknown_class_standard_coating(self):
        assert determine_threshold("UNKNOWN", 30) == pytest.approx(1.0225)
