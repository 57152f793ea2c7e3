import pytest

from storefront.core.formatting import format_price


@pytest.mark.parametrize("price, expected", [
    (0, "0 ₫"),
    (1000, "1.000 ₫"),
    (29990000, "29.990.000 ₫"),
    (999.6, "1.000 ₫"),
    (-2500, "-2.500 ₫"),
    (2.5, "3 ₫"),
    (1500.5, "1.501 ₫"),
    (-2.5, "-3 ₫"),
])
def test_format_price(price, expected):
    assert format_price(price) == expected


def test_separator_is_a_plain_space():
    assert format_price(1000).split(" ") == ["1.000", "₫"]
