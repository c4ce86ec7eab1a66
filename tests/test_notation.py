"""
Tests for scale notation parsing and formatting.
"""

import pytest

from objscale.notation import Scale, format_scale, parse_scale


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1:87", 1 / 87),
        (" 1 : 87 ", 1 / 87),
        ("1/87", 1 / 87),
        ("2:1", 2.0),
        ("1:87,5", 1 / 87.5),
        ("50%", 0.5),
        ("2x", 2.0),
        ("0.5", 0.5),
        (".25", 0.25),
        ("1e-2", 0.01),
    ],
)
def test_parse_scale(text, expected):
    assert parse_scale(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", "abc", "1:0", "0", "0%", "-2", "1:-87", "1:87:2", "x2"])
def test_parse_scale_invalid(text):
    with pytest.raises(ValueError):
        parse_scale(text)


@pytest.mark.parametrize(
    "factor, expected",
    [
        (0.011494252873563218, "1:87"),
        (1 / 87.5, "1:87.5"),
        (1.0, "1:1"),
        (0.99999999, "1:1"),
        (2.0, "2:1"),
        (0.75, "1:1.333"),
    ],
)
def test_format_scale(factor, expected):
    assert format_scale(factor) == expected


def test_format_scale_precision():
    assert format_scale(1 / 3.14159, precision=1) == "1:3.1"


def test_format_scale_rejects_non_positive():
    with pytest.raises(ValueError):
        format_scale(0.0)


class TestScale:
    """Test the Scale wrapper."""

    def test_from_string(self):
        scale = Scale("1:87")
        assert scale.valid
        assert scale.factor == pytest.approx(1 / 87)
        assert str(scale) == "1:87"
        assert float(scale) == pytest.approx(1 / 87)

    def test_from_float(self):
        assert str(Scale(0.5)) == "1:2"

    def test_invalid(self):
        scale = Scale("one to eighty-seven")
        assert not scale.valid
        assert scale.factor is None
        assert str(scale) == ""
        with pytest.raises(ValueError):
            float(scale)

    def test_invalid_number(self):
        assert not Scale(-1.0).valid
        assert not Scale(float("inf")).valid
