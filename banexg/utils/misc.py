"""JSON decoding, map access helpers, URL encoding and hashing."""

from __future__ import annotations

import dataclasses
import hashlib
import json
import logging
import math
import random
import re
from decimal import Decimal
from enum import IntEnum
from typing import Any, Iterable, Iterator, Optional, Union
from urllib.parse import quote_plus

logger = logging.getLogger(__name__)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT_RE = re.compile(r"[+-]?\d+")
_TRUE_TEXTS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_TEXTS = {"0", "f", "F", "FALSE", "false", "False"}


class JsonNum(IntEnum):
    """How numbers in decoded JSON are represented."""

    FLOAT = 0  # every number becomes a float
    STR = 1  # numbers are kept exactly as Decimal
    AUTO = 2  # integers within int64 become int, the rest float
    DEFAULT = 0


def uuid(length: int) -> str:
    """Random hex text of at most length characters."""
    return f"{random.getrandbits(64):x}"[:length]


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return _format_float(value)
        dec = Decimal(repr(value))
        exp = dec.adjusted()
        if dec.is_zero() or -4 <= exp < 21:
            return _format_float(value)
        digits = "".join(str(d) for d in dec.as_tuple().digits).rstrip("0") or "0"
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        sign = "-" if dec.is_signed() else ""
        return f"{sign}{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp):02d}"
    return str(value)


def url_encode_map(params: dict[str, Any], escape: bool) -> str:
    """Encode a mapping as a query string, escaping keys and values if asked."""
    parts = []
    for key, value in params.items():
        text = _format_value(value)
        if escape:
            parts.append(f"{quote_plus(key, safe='')}={quote_plus(text, safe='')}")
        else:
            parts.append(f"{key}={text}")
    return "&".join(parts)


def encode_uri_component(text: str, safe: str) -> str:
    """Query-escape text, leaving the characters in safe as they are."""
    escaped = quote_plus(text, safe="")
    for char in safe:
        escaped = escaped.replace(quote_plus(char, safe=""), char)
    return escaped


def get_map_float(data: dict[str, Any], key: str) -> float:
    """Parse a text value as float, or 0.0 if missing or unparsable."""
    raw = data.get(key)
    if raw is None:
        return 0.0
    if not isinstance(raw, str):
        raise TypeError(f"value of {key} should be str, but is {type(raw).__name__}")
    try:
        return float(raw)
    except ValueError:
        return 0.0


def _matches(value: Any, default: Any) -> bool:
    if default is None:
        return True
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, type(default))


def _check_type(key: str, value: Any, default: Any) -> Any:
    if not _matches(value, default):
        raise TypeError(
            f"option {key} should be {type(default).__name__}, but is {type(value).__name__}"
        )
    return value


def get_map_val(items: dict[str, Any], key: str, default: Any) -> Any:
    """The value under key, which must have the type of default."""
    if key in items:
        return _check_type(key, items[key], default)
    return default


def pop_map_val(items: dict[str, Any], key: str, default: Any) -> Any:
    """Remove and return the value under key, which must have the type of default."""
    if key in items:
        return _check_type(key, items.pop(key), default)
    return default


def _parse_bool(text: str) -> bool:
    if text in _TRUE_TEXTS:
        return True
    if text in _FALSE_TEXTS:
        return False
    raise ValueError(f"invalid bool: {text!r}")


def safe_map_val(items: dict[str, str], key: str, default: Any) -> Any:
    """Parse the text under key into the type of default; default if missing."""
    if key not in items:
        return default
    text = items[key]
    if isinstance(default, bool):
        return _parse_bool(text)
    if isinstance(default, int):
        if not _INT_RE.fullmatch(text):
            raise ValueError(f"invalid int: {text!r}")
        return int(text)
    if isinstance(default, float):
        return float(text)
    if isinstance(default, str):
        return text
    return unmarshal(text, JsonNum.DEFAULT)


def omit_map_keys(items: dict[str, Any], *args: str) -> None:
    """Remove the given keys from items, ignoring absent ones."""
    for key in args:
        items.pop(key, None)


def map_val_str(data: dict[str, Any]) -> dict[str, str]:
    """A copy of data with every value turned into text."""
    result = {}
    for key, value in data.items():
        if value is None:
            result[key] = ""
        elif isinstance(value, bool):
            result[key] = "true" if value else "false"
        elif isinstance(value, int):
            result[key] = str(value)
        elif isinstance(value, float):
            result[key] = _format_float(value)
        elif isinstance(value, (str, Decimal)):
            result[key] = str(value)
        else:
            result[key] = marshal(value)
    return result


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid json value: {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError("invalid json.Number value")
    return value


def _auto_int(text: str) -> Union[int, float]:
    value = int(text)
    if _INT64_MIN <= value <= _INT64_MAX:
        return value
    return _finite_float(text)


def unmarshal(data: Union[str, bytes, bytearray], num_type: int = JsonNum.DEFAULT) -> Any:
    """Decode JSON, representing numbers according to num_type."""
    text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
    if num_type == JsonNum.STR:
        return json.loads(
            text, parse_int=Decimal, parse_float=Decimal, parse_constant=_reject_constant
        )
    if num_type == JsonNum.AUTO:
        return json.loads(
            text, parse_int=_auto_int, parse_float=_finite_float, parse_constant=_reject_constant
        )
    return json.loads(
        text, parse_int=_finite_float, parse_float=_finite_float, parse_constant=_reject_constant
    )


def decode_stream(
    chunks: Iterable[Union[str, bytes]], num_type: int = JsonNum.DEFAULT
) -> Iterator[Any]:
    """Decode each JSON chunk, skipping and logging those that fail."""
    for chunk in chunks:
        try:
            yield unmarshal(chunk, num_type)
        except ValueError as exc:
            logger.error("Error unmarshalling chunk: %s", exc)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        if value == value.to_integral_value() and "." not in str(value):
            return int(value)
        return float(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"json: unsupported type: {type(value).__name__}")


def marshal(value: Any) -> str:
    """Encode value as compact JSON with sorted keys and HTML-safe escapes."""
    text = json.dumps(
        value,
        separators=(",", ":"),
        sort_keys=True,
        ensure_ascii=False,
        allow_nan=False,
        default=_json_default,
    )
    return (
        text.replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def _convert_number(value: Decimal) -> Union[int, float]:
    text = str(value)
    if _INT_RE.fullmatch(text):
        number = int(text)
        if _INT64_MIN <= number <= _INT64_MAX:
            return number
    result = float(value)
    if math.isinf(result) or math.isnan(result):
        raise ValueError("invalid json.Number value")
    return result


def parse_json_number(data: Any) -> Any:
    """Turn Decimal numbers inside dicts and lists into int or float, in place."""
    if isinstance(data, Decimal):
        return _convert_number(data)
    if isinstance(data, dict):
        for key, value in data.items():
            data[key] = parse_json_number(value)
        return data
    if isinstance(data, list):
        for idx, value in enumerate(data):
            data[idx] = parse_json_number(value)
        return data
    return data


def md5(data: Union[str, bytes, Optional[bytearray]]) -> str:
    """Hex MD5 digest of data."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.md5(bytes(data)).hexdigest()