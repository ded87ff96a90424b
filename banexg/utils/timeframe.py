"""Timeframe names, their lengths in seconds and bar alignment."""

from __future__ import annotations

import threading
from dataclasses import dataclass

SECS_MIN = 60
SECS_HOUR = SECS_MIN * 60
SECS_DAY = SECS_HOUR * 24
SECS_WEEK = SECS_DAY * 7
SECS_MON = SECS_DAY * 30
SECS_QTR = SECS_MON * 3
SECS_YEAR = SECS_DAY * 365


@dataclass(frozen=True)
class _TFOrigin:
    tf_secs: int
    offset_secs: int
    origin: str


_tf_secs: dict[str, int] = {}
_secs_tf: dict[int, str] = {}
_lock = threading.Lock()
_TF_ORIGINS = [_TFOrigin(604800, 345600, "1970-01-05")]

_UNIT_SCALES = {
    "y": SECS_YEAR,
    "Y": SECS_YEAR,
    "q": SECS_QTR,
    "Q": SECS_QTR,
    "M": SECS_MON,
    "w": SECS_WEEK,
    "W": SECS_WEEK,
    "d": SECS_DAY,
    "D": SECS_DAY,
    "h": SECS_HOUR,
    "H": SECS_HOUR,
    "m": SECS_MIN,
    "s": 1,
    "S": 1,
}

_SECS_UNITS = [
    (SECS_YEAR, "y"),
    (SECS_QTR, "q"),
    (SECS_MON, "M"),
    (SECS_WEEK, "w"),
    (SECS_DAY, "d"),
    (SECS_HOUR, "h"),
    (SECS_MIN, "m"),
    (1, "s"),
]


def _tdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def reg_tf_secs(items: dict[str, int]) -> None:
    """Register custom timeframe names and their lengths in seconds."""
    with _lock:
        for key, val in items.items():
            _tf_secs[key] = val
            _secs_tf[val] = key


def _parse_time_frame(timeframe: str) -> int:
    if len(timeframe) < 2:
        raise ValueError("timeframe string too short")
    amount_text, unit = timeframe[:-1], timeframe[-1]
    try:
        amount = int(amount_text)
    except ValueError:
        raise ValueError(f"invalid timeframe amount: {amount_text}") from None
    scale = _UNIT_SCALES.get(unit)
    if scale is None:
        raise ValueError(f"timeframe unit {unit} is not supported")
    return amount * scale


def tf_to_secs(timeframe: str) -> int:
    """Seconds in a timeframe; units s, m, h, d, w, M, q, y."""
    with _lock:
        secs = _tf_secs.get(timeframe)
        if secs is None:
            secs = _parse_time_frame(timeframe)
            _tf_secs[timeframe] = secs
            _secs_tf[secs] = timeframe
        return secs


def get_tf_align_origin(secs: int) -> tuple[str, int]:
    """The origin date and offset in seconds used to align bars of this length."""
    for item in _TF_ORIGINS:
        if secs < item.tf_secs:
            break
        if secs % item.tf_secs == 0:
            return item.origin, item.offset_secs
    return "1970-01-01", 0


def align_tf_secs_offset(time_secs: int, tf_secs: int, offset: int) -> int:
    """Start of the bar containing a second timestamp, shifted by offset."""
    if time_secs > 1000000000000:
        raise ValueError("10 digit timestamp is require for align_tf_secs")
    if offset == 0:
        return _tdiv(time_secs, tf_secs) * tf_secs
    return _tdiv(time_secs - offset, tf_secs) * tf_secs + offset


def align_tf_secs(time_secs: int, tf_secs: int) -> int:
    """Start of the bar containing a second timestamp."""
    _, offset = get_tf_align_origin(tf_secs)
    return align_tf_secs_offset(time_secs, tf_secs, offset)


def _check_msecs(time_msecs: int, tf_msecs: int) -> None:
    if time_msecs < 100000000000:
        raise ValueError(f"12 digit is required for align_tf_msecs, : {time_msecs}")
    if tf_msecs < 1000:
        raise ValueError("milliseconds tf_msecs is require for align_tf_msecs")


def align_tf_msecs(time_msecs: int, tf_msecs: int) -> int:
    """Start of the bar containing a millisecond timestamp."""
    _check_msecs(time_msecs, tf_msecs)
    return align_tf_secs(_tdiv(time_msecs, 1000), _tdiv(tf_msecs, 1000)) * 1000


def align_tf_msecs_offset(time_msecs: int, tf_msecs: int, offset: int) -> int:
    """Start of the bar containing a millisecond timestamp, shifted by offset."""
    _check_msecs(time_msecs, tf_msecs)
    return (
        align_tf_secs_offset(
            _tdiv(time_msecs, 1000), _tdiv(tf_msecs, 1000), _tdiv(offset, 1000)
        )
        * 1000
    )


def secs_to_tf(tf_secs: int) -> str:
    """Timeframe name for a length in seconds."""
    with _lock:
        timeframe = _secs_tf.get(tf_secs)
        if timeframe is None:
            for unit_secs, unit in _SECS_UNITS:
                if tf_secs >= unit_secs:
                    timeframe = f"{tf_secs // unit_secs}{unit}"
                    break
            else:
                raise ValueError(f"unsupport tf_secs:{tf_secs}")
            _secs_tf[tf_secs] = timeframe
        return timeframe