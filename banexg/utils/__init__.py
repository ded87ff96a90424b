"""Helpers for decimal precision, timeframes, float comparison and JSON."""