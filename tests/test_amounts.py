"""Tests for ledger amount parsing and formatting."""

import math

import pytest

from ledger_cashflow.amounts import format_amount, parse_amount


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("1,234", 1234.0),
            ("$1,234.50", 1234.5),
            ("(700,026)", -700026.0),
            ("-4,744,153", -4744153.0),
            ('"23,482,127"', 23482127.0),
            ("  42  ", 42.0),
            ("€99", 99.0),
            ("£(12)", -12.0),
        ],
    )
    def test_cleans_formatted_tokens(self, token, expected):
        assert parse_amount(token) == expected

    @pytest.mark.parametrize("token", ["", "   ", "-", "abc", "N/A", "12x", None])
    def test_unparseable_tokens_are_zero(self, token):
        assert parse_amount(token) == 0.0

    def test_numbers_pass_through(self):
        assert parse_amount(15) == 15.0
        assert parse_amount(-2.5) == -2.5

    def test_non_finite_values_are_zero(self):
        assert parse_amount(float("nan")) == 0.0
        assert parse_amount(float("inf")) == 0.0
        assert parse_amount("inf") == 0.0
        assert parse_amount("nan") == 0.0

    def test_booleans_are_zero(self):
        assert parse_amount(True) == 0.0


class TestFormatAmount:
    """Tests for format_amount."""

    def test_thousands_separators(self):
        assert format_amount(23482127) == "23,482,127"

    def test_negative_in_parentheses(self):
        assert format_amount(-4767895) == "(4,767,895)"

    def test_fractional_amount(self):
        assert format_amount(-1234.5) == "(1,234.5)"

    def test_zero(self):
        assert format_amount(0) == "0"

    def test_blank_for_missing(self):
        assert format_amount(None) == ""
        assert format_amount(math.nan) == ""

    @pytest.mark.parametrize("amount", [0.0, 1.0, -1.0, 999.99, -700026.0, 1234567.25, -0.01, 1e12])
    def test_parse_inverts_format(self, amount):
        assert parse_amount(format_amount(amount)) == amount
