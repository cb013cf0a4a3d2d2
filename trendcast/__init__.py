"""TrendCast: trend discovery and short-form video production."""

__version__ = "0.1.0"
