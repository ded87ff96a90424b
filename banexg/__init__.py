"""Trading data models, order books and number, timeframe and JSON helpers."""

__version__ = "0.1.0"