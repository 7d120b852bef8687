"""Tests for display formatting helpers."""

from __future__ import annotations

import pytest

from aggregator_core.portfolio import (
    format_address,
    format_currency,
    format_token_balance,
    format_token_balance_display,
    token_decimals,
)


class TestFormatAddress:
    def test_shortens_long_address(self):
        assert format_address("0x1234567890abcdef1234567890abcdef12345678") == "0x1234...5678"

    def test_short_input_unchanged(self):
        assert format_address("0x1234") == "0x1234"
        assert format_address("") == ""


class TestFormatTokenBalance:
    def test_wei_to_eth(self):
        assert format_token_balance("1500000000000000000", 18) == 1.5

    def test_six_decimals(self):
        assert format_token_balance("1000000000", 6) == 1000.0

    def test_int_input(self):
        assert format_token_balance(5000000, 8) == 0.05

    def test_zero_decimals(self):
        assert format_token_balance("42", 0) == 42.0

    @pytest.mark.parametrize("raw", [None, "", "not-a-number"])
    def test_unparseable_is_zero(self, raw):
        assert format_token_balance(raw, 18) == 0.0

    def test_display_fixed_places(self):
        assert format_token_balance_display("1234567", 6) == "1.23457"
        assert format_token_balance_display("1234567", 6, display_decimals=2) == "1.23"


class TestTokenDecimals:
    def test_zero_kept(self):
        assert token_decimals(0) == 0
        assert token_decimals("0") == 0

    def test_missing_uses_default(self):
        assert token_decimals(None) == 18
        assert token_decimals("", default=6) == 6

    def test_string_parsed(self):
        assert token_decimals("6") == 6


class TestFormatCurrency:
    def test_usd(self):
        assert format_currency(1234.5) == "$1,234.50"

    def test_negative_usd(self):
        assert format_currency(-12.5) == "-$12.50"

    def test_other_currency(self):
        assert format_currency(1234.5, "eur") == "1,234.50 EUR"
