# Test type: Unit Test
# Validation to be executed: Validates market-linked calculators — SIP,
#   lumpsum, step-up SIP, goal-seeking SIP per day and CAGR, including the
#   zero-rate and zero-year edge cases.
# Command: pytest test/test_unit_investment.py -v

"""Unit tests for fincalc.services.investment_service module."""

import pytest

from fincalc.errors import InvalidInputError
from fincalc.services.investment_service import (
    cagr,
    calculate_cagr,
    calculate_lumpsum,
    calculate_sip,
    calculate_sip_per_day,
    calculate_step_up_sip,
    compound_monthly,
    required_monthly_sip,
    sip_future_value,
)


class TestSipFutureValue:
    """FV = A × [((1 + i)^n − 1) / i] × (1 + i)."""

    def test_one_month(self):
        """A single start-of-month instalment earns one month of interest."""
        assert sip_future_value(1000, 0.01, 1) == pytest.approx(1010.0)

    def test_zero_rate_is_linear(self):
        assert sip_future_value(1000, 0, 24) == 24000

    def test_inverse(self):
        monthly = required_monthly_sip(1_000_000, 0.01, 120)
        assert sip_future_value(monthly, 0.01, 120) == pytest.approx(1_000_000)


class TestCalculateSip:

    def test_reference_example(self):
        """₹5,000/month at 12 % for 10 years ≈ ₹11,61,695."""
        result = calculate_sip(5000, 12, 10)
        assert result["investedAmount"] == 600000
        assert result["maturityAmount"] == pytest.approx(1161695, abs=1)
        assert result["profit"] == result["maturityAmount"] - result["investedAmount"]

    def test_series_one_point_per_year(self):
        result = calculate_sip(5000, 12, 10)
        points = result["yearlyPoints"]
        assert [p["year"] for p in points] == list(range(1, 11))
        assert points[0]["invested"] == 60000
        assert all(a["total"] < b["total"] for a, b in zip(points, points[1:]))

    def test_zero_rate(self):
        result = calculate_sip(1000, 0, 2)
        assert result["maturityAmount"] == 24000
        assert result["profit"] == 0

    def test_zero_years(self):
        result = calculate_sip(1000, 12, 0)
        assert result["maturityAmount"] == 0
        assert result["yearlyPoints"] == [{"year": 0, "invested": 0.0, "total": 0.0}]

    def test_rejects_non_positive_instalment(self):
        with pytest.raises(InvalidInputError):
            calculate_sip(0, 12, 10)


class TestCalculateLumpsum:

    def test_reference_example(self):
        """₹1,00,000 at 12 % compounded monthly for 10 years ≈ ₹3,30,039."""
        result = calculate_lumpsum(100000, 12, 10)
        assert result["investedAmount"] == 100000
        assert result["maturityAmount"] == pytest.approx(330039, abs=1)

    def test_invested_constant_across_series(self):
        points = calculate_lumpsum(100000, 8, 3)["yearlyPoints"]
        assert {p["invested"] for p in points} == {100000}

    def test_compound_monthly(self):
        assert compound_monthly(1000, 0.01, 2) == pytest.approx(1020.1)

    def test_zero_rate(self):
        result = calculate_lumpsum(50000, 0, 5)
        assert result["maturityAmount"] == 50000
        assert result["profit"] == 0


class TestStepUpSip:

    def test_percent_step(self):
        result = calculate_step_up_sip(5000, 12, 3, "PERCENT", 10)
        assert result["calculator"] == "STEP_UP_SIP"
        assert result["stepType"] == "PERCENT"
        assert result["stepPercent"] == 10
        assert result["stepAmount"] == 0
        assert result["totalInvestedAmount"] == 198600
        sips = [p["monthlySip"] for p in result["yearlyPoints"]]
        assert sips == pytest.approx([5000, 5500, 6050])

    def test_fixed_step(self):
        result = calculate_step_up_sip(5000, 12, 3, "FIXED", 1000)
        assert result["totalInvestedAmount"] == 216000
        assert result["stepAmount"] == 1000
        assert [p["monthlySip"] for p in result["yearlyPoints"]] == [5000, 6000, 7000]

    def test_no_step_matches_plain_sip(self):
        stepped = calculate_step_up_sip(5000, 12, 10, "PERCENT", 0)
        plain = calculate_sip(5000, 12, 10)
        assert stepped["maturityAmount"] == plain["maturityAmount"]
        assert stepped["totalInvestedAmount"] == plain["investedAmount"]

    def test_gain_consistent(self):
        result = calculate_step_up_sip(2000, 10, 5, "FIXED", 500)
        assert result["totalGain"] == result["maturityAmount"] - result["totalInvestedAmount"]
        assert result["inputSummary"].startswith("Starting SIP ₹2,000")

    def test_invalid_step_type(self):
        with pytest.raises(InvalidInputError, match="stepType"):
            calculate_step_up_sip(5000, 12, 3, "WEEKLY", 10)


class TestSipPerDay:

    def test_reference_example(self):
        """₹10,00,000 in 10 years at 12 % needs ≈ ₹4,304 a month, ₹143 a day."""
        result = calculate_sip_per_day(1_000_000, 12, 10)
        assert result["calculator"] == "SIP_PER_DAY"
        assert result["requiredMonthlySip"] == pytest.approx(4304, abs=1)
        assert result["requiredDailySaving"] == pytest.approx(143, abs=1)
        assert result["expectedMaturityAmount"] == pytest.approx(1_000_000, abs=1)

    def test_zero_rate(self):
        result = calculate_sip_per_day(120000, 0, 10)
        assert result["requiredMonthlySip"] == 1000
        assert result["requiredDailySaving"] == 33
        assert result["totalInvestedAmount"] == 120000

    def test_series_reaches_goal(self):
        points = calculate_sip_per_day(500000, 9, 5)["yearlyPoints"]
        assert len(points) == 5
        assert points[-1]["corpusValue"] == pytest.approx(500000)


class TestCagr:

    def test_formula(self):
        assert cagr(100, 121, 2) == pytest.approx(0.10)

    def test_doubling_in_five_years(self):
        result = calculate_cagr(100000, 200000, 5)
        assert result["cagrPercent"] == 14.87
        assert result["totalReturnPercent"] == 100.0
        assert result["totalGain"] == 100000

    def test_series_ends_on_final(self):
        points = calculate_cagr(100000, 200000, 5)["yearlyPoints"]
        assert points[0] == {"year": 0, "value": 100000}
        assert points[-1]["value"] == pytest.approx(200000)

    def test_fractional_years(self):
        points = calculate_cagr(1000, 1500, 2.5)["yearlyPoints"]
        assert [p["year"] for p in points] == [0, 1, 2, 2.5]
        assert points[-1]["value"] == pytest.approx(1500)

    def test_loss(self):
        assert calculate_cagr(1000, 500, 1)["cagrPercent"] == -50.0

    def test_zero_years_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_cagr(1000, 1500, 0)


# ── Properties over a table of inputs ────────────────────────────────────

SIP_CASES = [
    # (monthly, rate, years)
    (500, 8, 1),
    (5000, 12, 10),
    (12345.67, 9.5, 7),
    (25000, 15, 30),
    (1_00_00_000, 12, 40),
    (1e9, 24, 25),
    (1000, 0, 20),
]

CAGR_CASES = [
    # (initial, final, years)
    (100000, 200000, 5),
    (1000, 1500, 2.5),
    (50000, 45000, 0.5),
    (1, 1_000_000, 12.75),
    (2_50_000, 1_00_00_000, 7.25),
    (1e12, 3e12, 20),
    (999.99, 1000, 100),
]


class TestInvestmentProperties:

    @pytest.mark.parametrize("monthly, rate, years", SIP_CASES)
    def test_sip_profit_identity(self, monthly, rate, years):
        result = calculate_sip(monthly, rate, years)
        assert result["maturityAmount"] - result["investedAmount"] == result["profit"]
        assert result["maturityAmount"] >= result["investedAmount"]
        assert result["investedAmount"] == pytest.approx(monthly * 12 * years, abs=1)

    @pytest.mark.parametrize("monthly, rate, years", SIP_CASES)
    def test_sip_last_point_matches_summary(self, monthly, rate, years):
        result = calculate_sip(monthly, rate, years)
        assert result["yearlyPoints"][-1]["total"] == pytest.approx(result["maturityAmount"], abs=0.5)

    @pytest.mark.parametrize("initial, final, years", CAGR_CASES)
    def test_cagr_series_reproduces_final(self, initial, final, years):
        points = calculate_cagr(initial, final, years)["yearlyPoints"]
        assert points[-1]["year"] == years
        assert points[-1]["value"] == pytest.approx(final, abs=1)
        assert points[0]["value"] == pytest.approx(initial)

    @pytest.mark.parametrize("initial, final, years", CAGR_CASES)
    def test_cagr_gain_identity(self, initial, final, years):
        result = calculate_cagr(initial, final, years)
        assert result["totalGain"] == result["finalAmount"] - result["initialAmount"]

    @pytest.mark.parametrize("amount", [1, 999.5, 5000, 1_23_45_678, 1e12])
    @pytest.mark.parametrize("years", [1, 7, 40])
    def test_zero_rate_maturity_equals_invested(self, amount, years):
        for calculate in (calculate_sip, calculate_lumpsum):
            result = calculate(amount, 0, years)
            assert result["maturityAmount"] == result["investedAmount"]
            assert result["profit"] == 0
