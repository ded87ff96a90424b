import re
import sys
from decimal import Decimal

import pytest

from banexg.utils.misc import (
    JsonNum,
    decode_stream,
    encode_uri_component,
    get_map_float,
    get_map_val,
    map_val_str,
    marshal,
    md5,
    omit_map_keys,
    parse_json_number,
    pop_map_val,
    safe_map_val,
    unmarshal,
    url_encode_map,
    uuid,
)


@pytest.mark.parametrize(
    "value",
    [
        2**63 - 1,
        -(2**63),
        2**31 - 1,
        -(2**31),
        sys.float_info.max,
        3.4028234663852886e38,
    ],
)
def test_auto_roundtrip_keeps_values(value):
    text = marshal({"val": value})
    result = unmarshal(text, JsonNum.AUTO)
    assert result["val"] == value
    assert type(result["val"]) is type(value)
    assert str(result["val"]) == str(value)


def test_uuid_length_and_hex():
    text = uuid(8)
    assert len(text) <= 8
    assert re.fullmatch(r"[0-9a-f]+", text)


def test_url_encode_map_escape():
    params = {"a b": "x&y", "n": 1.0, "ok": True}
    assert url_encode_map(params, True) == "a+b=x%26y&n=1&ok=true"


def test_url_encode_map_plain():
    assert url_encode_map({"a": "x y", "b": 2}, False) == "a=x y&b=2"


def test_encode_uri_component_keeps_safe_chars():
    assert encode_uri_component("a b(c)*!", "~()*!.'") == "a+b(c)*!"
    assert encode_uri_component("k=v/+", "~()*!.'") == "k%3Dv%2F%2B"


def test_get_map_float():
    data = {"a": "1.5", "b": "oops", "c": None}
    assert get_map_float(data, "a") == 1.5
    assert get_map_float(data, "b") == 0.0
    assert get_map_float(data, "c") == 0.0
    assert get_map_float(data, "missing") == 0.0


def test_get_map_float_non_text_raises():
    with pytest.raises(TypeError):
        get_map_float({"a": 3}, "a")


def test_get_map_val():
    items = {"cap": 20, "name": "x"}
    assert get_map_val(items, "cap", 100) == 20
    assert get_map_val(items, "other", 100) == 100
    assert "cap" in items


def test_get_map_val_wrong_type_raises():
    with pytest.raises(TypeError, match="option cap should be int"):
        get_map_val({"cap": "20"}, "cap", 100)
    with pytest.raises(TypeError):
        get_map_val({"flag": 1}, "flag", False)


def test_pop_map_val_removes_key():
    items = {"ChanCap": 50, "keep": 1}
    assert pop_map_val(items, "ChanCap", 100) == 50
    assert items == {"keep": 1}
    assert pop_map_val(items, "ChanCap", 100) == 100


def test_pop_map_val_wrong_type_raises_and_removes():
    items = {"cap": 1.5}
    with pytest.raises(TypeError):
        pop_map_val(items, "cap", 100)
    assert items == {}


def test_safe_map_val_parses_types():
    items = {"i": "42", "f": "1.25", "b": "true", "s": "abc", "l": "[1, 2]"}
    assert safe_map_val(items, "i", 0) == 42
    assert safe_map_val(items, "f", 0.0) == 1.25
    assert safe_map_val(items, "b", False) is True
    assert safe_map_val(items, "s", "") == "abc"
    assert safe_map_val(items, "l", []) == [1.0, 2.0]
    assert safe_map_val(items, "missing", 7) == 7


def test_safe_map_val_bad_text_raises():
    with pytest.raises(ValueError):
        safe_map_val({"i": "4x"}, "i", 0)
    with pytest.raises(ValueError):
        safe_map_val({"b": "yes"}, "b", False)


def test_omit_map_keys():
    items = {"a": 1, "b": 2, "c": 3}
    omit_map_keys(items, "a", "c", "zz")
    assert items == {"b": 2}


def test_map_val_str():
    data = {
        "n": None,
        "b": False,
        "i": 12,
        "f": 1.5,
        "g": 3.0,
        "s": "x",
        "d": Decimal("123.450"),
        "o": {"k": 1},
    }
    assert map_val_str(data) == {
        "n": "",
        "b": "false",
        "i": "12",
        "f": "1.5",
        "g": "3",
        "s": "x",
        "d": "123.450",
        "o": '{"k":1}',
    }


def test_unmarshal_float_mode():
    result = unmarshal(b'{"a": 1, "b": [2.5]}')
    assert result == {"a": 1.0, "b": [2.5]}
    assert isinstance(result["a"], float)


def test_unmarshal_str_mode_keeps_exact_numbers():
    result = unmarshal('{"a": 1.50, "b": 12345678901234567890}', JsonNum.STR)
    assert result["a"] == Decimal("1.50")
    assert str(result["a"]) == "1.50"
    assert result["b"] == Decimal("12345678901234567890")


def test_unmarshal_auto_mode():
    result = unmarshal("[1, 1.0, 1e5, 99999999999999999999]", JsonNum.AUTO)
    assert result[0] == 1 and isinstance(result[0], int)
    assert isinstance(result[1], float)
    assert result[2] == 100000.0 and isinstance(result[2], float)
    assert isinstance(result[3], float)


def test_unmarshal_rejects_invalid():
    with pytest.raises(ValueError):
        unmarshal("{bad")
    with pytest.raises(ValueError):
        unmarshal("[NaN]")
    with pytest.raises(ValueError):
        unmarshal("[1e400]", JsonNum.AUTO)


def test_marshal_sorted_and_escaped():
    assert marshal({"b": 1, "a": "<x>&"}) == '{"a":"\\u003cx\\u003e\\u0026","b":1}'


def test_marshal_nan_raises():
    with pytest.raises(ValueError):
        marshal({"a": float("nan")})


def test_parse_json_number_converts_nested():
    data = {"a": Decimal("5"), "b": [Decimal("1.5"), {"c": Decimal("1E+5")}], "s": "x"}
    result = parse_json_number(data)
    assert result == {"a": 5, "b": [1.5, {"c": 100000.0}], "s": "x"}
    assert isinstance(result["a"], int)
    assert isinstance(result["b"][1]["c"], float)


def test_decode_stream_skips_invalid():
    chunks = [b'{"a": 1}', b"bad", b"[2]"]
    assert list(decode_stream(chunks, JsonNum.AUTO)) == [{"a": 1}, [2]]


def test_md5():
    assert md5(b"hello") == "5d41402abc4b2a76b9719d911017c592"
    assert md5("hello") == "5d41402abc4b2a76b9719d911017c592"