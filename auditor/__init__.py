"""Government website audit pipeline and report aggregation."""

__version__ = "1.0.0"
