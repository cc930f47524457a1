"""Menu order pricing: option groups, cart lines and checkout totals."""

__version__ = "1.0.0"
