from __future__ import annotations

import pytest

from ens_runner.errors import UsageError
from ens_runner.units import parse_count, parse_gas_price, parse_int


@pytest.mark.parametrize(
    "value, expected",
    [
        ("20gwei", 20_000_000_000),
        ("1.5 gwei", 1_500_000_000),
        ("1000", 1000),
        ("1_000", 1000),
        ("0x3b9aca00", 1_000_000_000),
        ("2ether", 2 * 10**18),
    ],
)
def test_parse_gas_price(value, expected):
    assert parse_gas_price(value) == expected


def test_parse_gas_price_empty_means_default():
    assert parse_gas_price(None) is None
    assert parse_gas_price("  ") is None


@pytest.mark.parametrize("value", ["fast", "10 parsecs", "$GAS"])
def test_parse_gas_price_rejects_garbage(value):
    with pytest.raises(UsageError):
        parse_gas_price(value)


@pytest.mark.parametrize(
    "token, expected",
    [("0X10", 16), ("0x5208", 21_000), (" 42 ", 42), ("1_000", 1000), ("-1", -1)],
)
def test_parse_int_reads_decimal_and_hex(token, expected):
    assert parse_int(token) == expected


@pytest.mark.parametrize("token", ["", "0x", "ten", "$NONCE", "1.5"])
def test_parse_int_returns_none_for_non_integers(token):
    assert parse_int(token) is None


def test_dollar_prefixed_values_are_plain_usage_errors():
    with pytest.raises(UsageError, match=r"invalid nonce \$5"):
        parse_count("$5", "nonce")


def test_parse_count_rejects_negative():
    with pytest.raises(UsageError, match="invalid nonce -1"):
        parse_count("-1", "nonce")
