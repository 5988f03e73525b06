"""Tests for magic number derivation."""

import logging

from magicalc.core.magic import decimal_digits, derive


def test_derive_positive_magic_number():
    """target - sum, digits most significant first."""
    magic = derive(2161418, 4838)
    assert magic.value == 2156580
    assert magic.digits == (2, 1, 5, 6, 5, 8, 0)
    assert not magic.is_negative
    assert len(magic) == 7


def test_derive_zero_is_single_zero_digit():
    magic = derive(2161418, 2161418)
    assert magic.value == 0
    assert magic.digits == (0,)


def test_derive_negative_uses_absolute_value_and_warns(caplog):
    """A sum above the target is logged, never raised."""
    with caplog.at_level(logging.WARNING, logger="magicalc.core.magic"):
        magic = derive(2161418, 2162227)

    assert magic.value == -809
    assert magic.digits == (8, 0, 9)
    assert magic.is_negative
    assert any("negative" in record.message for record in caplog.records)


def test_derive_positive_does_not_warn(caplog):
    with caplog.at_level(logging.WARNING, logger="magicalc.core.magic"):
        derive(2161418, 100)
    assert caplog.records == []


def test_decimal_digits():
    assert decimal_digits(0) == (0,)
    assert decimal_digits(7) == (7,)
    assert decimal_digits(1005) == (1, 0, 0, 5)
    assert decimal_digits(-42) == (4, 2)
