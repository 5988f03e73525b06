"""Tests for display formatting helpers."""

from datetime import datetime

import pytest

from magicalc.utils.formatting import format_with_thousands_separator, parse_number, seconds_text


@pytest.mark.parametrize("number,expected", [
    (0, "0"),
    (7, "7"),
    (999, "999"),
    (1000, "1,000"),
    (4838, "4,838"),
    (100000, "100,000"),
    (2161418, "2,161,418"),
    (12312359, "12,312,359"),
    (-809, "-809"),
    (-1234, "-1,234"),
])
def test_format_with_thousands_separator(number, expected):
    assert format_with_thousands_separator(number) == expected


def test_format_custom_separator():
    assert format_with_thousands_separator(2161418, separator=".") == "2.161.418"


def test_parse_number_falls_back_to_zero():
    """Unparsable input is treated as 0, never raised."""
    assert parse_number("") == 0
    assert parse_number("abc") == 0
    assert parse_number("-5") == 0


def test_parse_number_accepts_leading_zeros():
    assert parse_number("007") == 7
    assert parse_number("4821") == 4821


def test_seconds_text_is_zero_padded():
    assert seconds_text(datetime(2026, 2, 16, 14, 18, 7)) == ":07"
    assert seconds_text(datetime(2026, 2, 16, 14, 18, 42)) == ":42"
