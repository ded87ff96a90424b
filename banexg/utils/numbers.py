"""Float comparison and identifier casing."""

from __future__ import annotations

import math

_THRES_FLOAT64_EQ = 1e-9


def equal_in(a: float, b: float, thres: float) -> bool:
    """Whether a and b differ by at most thres; two NaNs count as equal."""
    if math.isnan(a) and math.isnan(b):
        return True
    return abs(a - b) <= thres


def equal_nearly(a: float, b: float) -> bool:
    """Whether a and b are equal up to floating point noise."""
    return equal_in(a, b, _THRES_FLOAT64_EQ)


def snake_to_camel(text: str) -> str:
    """Turn snake_case into CamelCase, title-casing each part."""
    return "".join(part.title() for part in text.split("_"))