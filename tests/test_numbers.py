import math

import pytest

from banexg.utils.numbers import equal_in, equal_nearly, snake_to_camel


def test_equal_nearly_float_noise():
    assert equal_nearly(0.1 + 0.2, 0.3)


def test_equal_nearly_detects_difference():
    assert not equal_nearly(1.0, 1.001)


def test_equal_nearly_nan():
    assert equal_nearly(math.nan, math.nan)
    assert not equal_nearly(math.nan, 1.0)


@pytest.mark.parametrize("a, b, thres, expected", [(1.0, 1.5, 0.5, True), (1.0, 1.6, 0.5, False)])
def test_equal_in(a, b, thres, expected):
    assert equal_in(a, b, thres) is expected


def test_equal_in_symmetric():
    assert equal_in(2.0, 2.25, 0.3) == equal_in(2.25, 2.0, 0.3)


def test_snake_to_camel():
    assert snake_to_camel("fetch_order_book") == "FetchOrderBook"


def test_snake_to_camel_lowers_rest():
    assert snake_to_camel("hello_WORLD") == "HelloWorld"


def test_snake_to_camel_no_underscore():
    assert snake_to_camel("ticker") == "Ticker"