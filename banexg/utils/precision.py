"""Rounding and truncating decimal numbers to a precision."""

from __future__ import annotations

import re
from decimal import (
    MAX_EMAX,
    MIN_EMIN,
    ROUND_DOWN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    InvalidOperation,
    localcontext,
)
from enum import IntEnum
from typing import Union


class PrecMode(IntEnum):
    """How a precision value is interpreted."""

    DECIMAL_PLACE = 2  # keep this many digits after the decimal point
    SIGNIF_DIGITS = 3  # keep this many significant digits
    TICK_SIZE = 4  # snap to a multiple of the given tick


class PrecisionError(ValueError):
    """Raised for an invalid number, precision or mode."""


_CTX = Context(prec=1000, rounding=ROUND_HALF_UP, Emax=MAX_EMAX, Emin=MIN_EMIN)
_NUM_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_TRIM_END_ZERO = re.compile(r"0+$")
_DIV_QUANTUM = Decimal("1E-16")
_TEN = Decimal(10)


def _parse(text: str) -> Decimal:
    if not _NUM_RE.fullmatch(text):
        raise InvalidOperation(text)
    return Decimal(text)


def _string(value: Decimal) -> str:
    if value.is_zero():
        return "0"
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _round(value: Decimal, places: int, rounding: str = ROUND_HALF_UP) -> Decimal:
    try:
        return value.quantize(Decimal(1).scaleb(-places), rounding=rounding)
    except InvalidOperation:
        return value


def _truncate(value: Decimal, places: int) -> Decimal:
    if places >= 0 and value.as_tuple().exponent < -places:
        return _round(value, places, ROUND_DOWN)
    return value


def _fixed(value: Decimal, places: int) -> str:
    rounded = _round(value, places)
    if rounded.is_zero():
        rounded = rounded.copy_abs()
    return format(rounded, "f")


def _div(a: Decimal, b: Decimal) -> Decimal:
    return (a / b).quantize(_DIV_QUANTUM, rounding=ROUND_HALF_UP)


def _pow10(exp: Decimal) -> Decimal:
    if exp == exp.to_integral_value():
        return Decimal(1).scaleb(int(exp))
    return _TEN**exp


def adjusted(value: Union[Decimal, str, int]) -> int:
    """Exponent of the most significant digit, like Decimal.adjusted()."""
    if not isinstance(value, Decimal):
        try:
            value = _parse(str(value))
        except InvalidOperation:
            raise PrecisionError(f"invalid num {value}") from None
    return value.adjusted()


def dec_to_prec(
    num: str,
    count_mode: int,
    precision: str,
    is_round: bool,
    pad_zero: bool,
) -> str:
    """Round or truncate the number text num to a precision, returning text."""
    if precision == "":
        raise PrecisionError("invalid precision")
    if count_mode < PrecMode.DECIMAL_PLACE or count_mode > PrecMode.TICK_SIZE:
        raise PrecisionError(f"invalid count mode {int(count_mode)}")
    with localcontext(_CTX):
        try:
            prec_val = _parse(precision)
        except InvalidOperation:
            raise PrecisionError(f"invalid precision {precision}") from None
        try:
            num_val = _parse(num)
        except InvalidOperation:
            raise PrecisionError(f"invalid num {num}") from None
        return _dec_to_prec(num_val, count_mode, prec_val, is_round, pad_zero)


def _dec_to_prec(
    num_val: Decimal,
    count_mode: int,
    prec_val: Decimal,
    is_round: bool,
    pad_zero: bool,
) -> str:
    if prec_val < 0:
        if count_mode == PrecMode.TICK_SIZE:
            raise PrecisionError("negative precision for tick size")
        nearest = _pow10(-prec_val)
        if is_round:
            mid = dec_to_prec(
                _string(_div(num_val, nearest)), PrecMode.DECIMAL_PLACE, "0", is_round, pad_zero
            )
            return _string(_parse(mid) * nearest)
        truncated = _string(num_val - num_val % nearest)
        return dec_to_prec(truncated, PrecMode.DECIMAL_PLACE, "0", is_round, pad_zero)

    if count_mode == PrecMode.TICK_SIZE:
        missing = abs(num_val) % prec_val
        if not missing.is_zero():
            delta = missing
            if is_round:
                if missing >= _div(prec_val, Decimal(2)):
                    delta = delta - prec_val
                if num_val > 0:
                    delta = -delta
            elif num_val >= 0:
                delta = -delta
            num_val = num_val + delta
        parts = _TRIM_END_ZERO.sub("", _string(prec_val)).split(".")
        new_prec = "0"
        if len(parts) > 1:
            new_prec = str(len(parts[1]))
        else:
            match = _TRIM_END_ZERO.search(parts[0])
            if match is not None and match.group(0):
                new_prec = str(-len(match.group(0)))
        return dec_to_prec(_string(num_val), PrecMode.DECIMAL_PLACE, new_prec, True, pad_zero)

    prec_int = int(prec_val)
    precise = Decimal(0)
    num_exp = num_val.adjusted()
    if is_round:
        if count_mode == PrecMode.DECIMAL_PLACE:
            precise = _round(num_val, prec_int)
        else:
            q = prec_val - (num_exp + 1)
            sig_fig = _pow10(-q)
            if q < 0:
                prec_text = _string(num_val)[:prec_int] or "0"
                try:
                    prec_num = _parse(prec_text)
                except InvalidOperation:
                    raise PrecisionError(f"numPrecText fail {prec_text}") from None
                below = sig_fig * prec_num
                above = below + sig_fig
                precise = below if abs(below - num_val) < abs(above - num_val) else above
            else:
                precise = _round(num_val, int(q))
        num_exp = precise.adjusted()
    else:
        if count_mode == PrecMode.DECIMAL_PLACE:
            precise = _truncate(num_val, prec_int)
        elif not prec_val.is_zero():
            margin = _pow10(Decimal(num_exp))
            precise = _truncate(_div(num_val, margin), prec_int - 1) * margin

    if not pad_zero:
        return _string(precise)
    if count_mode == PrecMode.DECIMAL_PLACE:
        return _fixed(precise, prec_int)
    dot_num = prec_int - num_exp - 1
    if dot_num > 0:
        return _fixed(precise, dot_num)
    return _string(precise)


def _float_text(value: float) -> str:
    return _string(Decimal(repr(float(value))))


def prec_float64_str(num: float, prec: float, is_round: bool, mode: int = 0) -> str:
    """Apply a precision to a float and return the result as text."""
    if mode == 0:
        mode = PrecMode.DECIMAL_PLACE
    return dec_to_prec(_float_text(num), mode, _float_text(prec), is_round, False)


def prec_float64(num: float, prec: float, is_round: bool, mode: int = 0) -> float:
    """Apply a precision to a float."""
    return float(prec_float64_str(num, prec, is_round, mode))