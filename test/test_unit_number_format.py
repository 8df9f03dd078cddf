# Test type: Unit Test
# Validation to be executed: Validates Indian digit grouping of raw and
#   partially typed numerals, tolerant parsing, and rupee formatting.
# Command: pytest test/test_unit_number_format.py -v

"""Unit tests for fincalc.utils.number_format module."""

import math

import pytest

from fincalc.utils.number_format import (
    format_indian_groups,
    format_inr,
    parse_formatted_number,
)


class TestFormatIndianGroups:
    """Last three digits together, the rest in pairs."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("123", "123"),
            ("1234", "1,234"),
            ("12345", "12,345"),
            ("123456", "1,23,456"),
            ("1234567", "12,34,567"),
            ("12345678", "1,23,45,678"),
        ],
    )
    def test_grouping(self, raw, expected):
        assert format_indian_groups(raw) == expected

    def test_regroups_existing_separators(self):
        """Typing a digit into '1,234' yields '1,2345' → '12,345'."""
        assert format_indian_groups("1,2345") == "12,345"

    def test_empty_stays_empty(self):
        assert format_indian_groups("") == ""
        assert format_indian_groups(",") == ""

    def test_non_numeric_returned_unchanged(self):
        assert format_indian_groups("12a4") == "12a4"
        assert format_indian_groups("1.2.3") == "1.2.3"

    def test_negative_treated_as_non_numeric(self):
        assert format_indian_groups("-500") == "-500"

    def test_trailing_decimal_point_kept(self):
        assert format_indian_groups("1234.") == "1,234."

    def test_fraction_kept(self):
        assert format_indian_groups("1234567.89") == "12,34,567.89"

    def test_leading_zeros_dropped(self):
        assert format_indian_groups("007") == "7"
        assert format_indian_groups("0") == "0"


class TestParseFormattedNumber:
    def test_grouped(self):
        assert parse_formatted_number("12,34,567") == 1234567

    def test_fraction_and_whitespace(self):
        assert parse_formatted_number(" 1,000.5 ") == 1000.5

    def test_empty_is_nan(self):
        assert math.isnan(parse_formatted_number(""))
        assert math.isnan(parse_formatted_number(None))

    def test_junk_is_nan(self):
        assert math.isnan(parse_formatted_number("abc"))

    def test_non_finite_is_nan(self):
        assert math.isnan(parse_formatted_number("inf"))
        assert math.isnan(parse_formatted_number("nan"))

    def test_numbers_pass_through(self):
        assert parse_formatted_number(42) == 42.0
        assert parse_formatted_number(2.5) == 2.5

    def test_inverse_of_format(self):
        assert parse_formatted_number(format_indian_groups("98765432")) == 98765432


class TestFormatInr:
    def test_whole_rupees(self):
        assert format_inr(1234567) == "₹12,34,567"

    def test_rounds_to_whole_rupees(self):
        assert format_inr(1999.6) == "₹2,000"

    def test_two_decimals(self):
        assert format_inr(1234567.5, decimals=2) == "₹12,34,567.50"

    def test_without_symbol(self):
        assert format_inr(999, symbol=False) == "999"
