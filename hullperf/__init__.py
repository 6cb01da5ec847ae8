"""HULLPERF: hull performance index estimation and cleaning recommendations."""

__version__ = "0.1.0"
