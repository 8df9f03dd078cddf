# Test type: Unit Test
# Validation to be executed: Validates retirement corpus projection
#   (existing corpus + monthly SIP, inflation-adjusted value) and the
#   systematic withdrawal plan with depletion.
# Command: pytest test/test_unit_retirement.py -v

"""Unit tests for fincalc.services.retirement_service module."""

import pytest

from fincalc.errors import InvalidInputError
from fincalc.services.investment_service import sip_future_value
from fincalc.services.retirement_service import (
    adjust_for_inflation,
    calculate_retirement,
    calculate_swp,
)


class TestAdjustForInflation:
    """A_real = A / (1 + inflation)^t."""

    def test_basic(self):
        assert adjust_for_inflation(1000, 5, 10) == pytest.approx(1000 / 1.05 ** 10)

    def test_zero_inflation(self):
        assert adjust_for_inflation(1000, 0, 10) == 1000


class TestCalculateRetirement:

    def test_zero_return_is_plain_savings(self):
        result = calculate_retirement(30, 32, 1000, current_corpus=0, expected_return=0)
        assert result["yearsToInvest"] == 2
        assert result["totalInvestment"] == 24000
        assert result["estimatedCorpusAtRetirement"] == 24000
        assert result["totalGain"] == 0

    def test_series_starts_at_current_age(self):
        points = calculate_retirement(30, 33, 1000, 50000, 10)["yearlyPoints"]
        assert [p["age"] for p in points] == [30, 31, 32, 33]
        assert points[0]["corpus"] == 50000
        assert points[0]["invested"] == 50000

    def test_existing_corpus_counted_as_investment(self):
        result = calculate_retirement(40, 41, 1000, current_corpus=100000, expected_return=0)
        assert result["totalInvestment"] == 112000
        assert result["estimatedCorpusAtRetirement"] == 112000

    def test_sip_only_matches_sip_formula(self):
        result = calculate_retirement(25, 35, 5000, 0, 12)
        expected = sip_future_value(5000, 0.01, 120)
        assert result["estimatedCorpusAtRetirement"] == pytest.approx(expected, abs=1)

    def test_existing_corpus_compounds_monthly(self):
        result = calculate_retirement(50, 51, 1, current_corpus=100000, expected_return=12)
        assert result["estimatedCorpusAtRetirement"] == pytest.approx(
            100000 * 1.01 ** 12 + sip_future_value(1, 0.01, 12), abs=1
        )

    def test_inflation_adjusted_value(self):
        result = calculate_retirement(30, 40, 10000, 0, 10, inflation=6)
        assert result["corpusInTodayValue"] == pytest.approx(
            result["estimatedCorpusAtRetirement"] / 1.06 ** 10, abs=1
        )
        assert result["corpusInTodayValue"] < result["estimatedCorpusAtRetirement"]

    def test_same_age_gives_single_zero_point(self):
        result = calculate_retirement(60, 60, 1000, 0, 8)
        assert result["estimatedCorpusAtRetirement"] == 0
        assert result["yearlyPoints"] == [
            {"age": 60, "invested": 0.0, "corpus": 0.0, "corpusReal": 0.0}
        ]

    def test_retirement_before_current_age_rejected(self):
        with pytest.raises(InvalidInputError, match="retirementAge"):
            calculate_retirement(50, 45, 1000, 0, 8)


class TestCalculateSwp:

    def test_depletion(self):
        """₹1,00,000 at 0 % with ₹10,000 a month runs out in month 10."""
        result = calculate_swp(100000, 10000, 0, 2)
        assert result["depletionMonth"] == 10
        assert result["totalWithdrawn"] == 100000
        assert result["endingCorpus"] == 0
        assert result["totalGrowth"] == 0
        assert [p["balance"] for p in result["yearlyPoints"]] == [0.0, 0.0]

    def test_partial_last_withdrawal(self):
        result = calculate_swp(25000, 10000, 0, 1)
        assert result["totalWithdrawn"] == 25000
        assert result["depletionMonth"] == 3

    def test_sustainable_withdrawal(self):
        result = calculate_swp(1_000_000, 5000, 12, 1)
        assert result["depletionMonth"] is None
        assert result["totalWithdrawn"] == 60000
        assert result["endingCorpus"] > 1_000_000
        assert result["totalGrowth"] == (
            result["endingCorpus"] + result["totalWithdrawn"] - result["initialCorpus"]
        )

    def test_zero_years(self):
        result = calculate_swp(100000, 1000, 8, 0)
        assert result["totalWithdrawn"] == 0
        assert result["yearlyPoints"] == [{"year": 0, "balance": 0.0, "totalWithdrawn": 0.0}]

    def test_non_positive_withdrawal_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_swp(100000, 0, 8, 5)
