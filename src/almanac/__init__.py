"""almanac — piecewise range-remapping pipeline CLI."""

__version__ = "0.1.0"
