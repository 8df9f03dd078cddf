"""Market-linked investment calculations — SIP, lumpsum, step-up SIP,
SIP-per-day (goal seeking) and CAGR.

SIP (annuity due, monthly):  FV = A × [((1 + i)^n − 1) / i] × (1 + i)
Lumpsum (monthly):           FV = P × (1 + i)^n
Goal-seeking SIP:            A  = FV × i / [((1 + i)^n − 1) × (1 + i)]
CAGR:                        (Final / Initial)^(1 / years) − 1

i = rate / 12 / 100,  n = years × 12.  At i = 0 every formula falls back to
straight accumulation.
"""

from __future__ import annotations

from enum import Enum

from fincalc.errors import InvalidInputError
from fincalc.utils.helpers import (
    MONTHS_PER_YEAR,
    empty_series,
    monthly_rate,
    require_non_negative,
    require_positive,
    require_whole_years,
    round_currency,
    round_rupee,
    years_in_months,
)
from fincalc.utils.number_format import format_inr

# Flat month length used to turn a monthly SIP into a daily saving.
DAYS_PER_MONTH = 30


class StepType(str, Enum):
    PERCENT = "PERCENT"
    FIXED = "FIXED"


# ── Core formulas ─────────────────────────────────────────────────────────

def sip_future_value(monthly: float, rate_per_month: float, months: int) -> float:
    """FV of *months* start-of-month instalments."""
    if rate_per_month == 0:
        return monthly * months
    growth = (1 + rate_per_month) ** months
    return monthly * ((growth - 1) / rate_per_month) * (1 + rate_per_month)


def compound_monthly(principal: float, rate_per_month: float, months: int) -> float:
    return principal * ((1 + rate_per_month) ** months)


def required_monthly_sip(target: float, rate_per_month: float, months: int) -> float:
    """Invert :func:`sip_future_value` for the instalment."""
    if months == 0:
        return 0.0
    if rate_per_month == 0:
        return target / months
    growth = (1 + rate_per_month) ** months
    return target * rate_per_month / ((growth - 1) * (1 + rate_per_month))


# ── SIP ───────────────────────────────────────────────────────────────────

def calculate_sip(monthly: float, rate: float, years: int) -> dict:
    """Monthly SIP maturity with a year-by-year growth series.

    Returns dict with keys: investedAmount, maturityAmount, profit, yearlyPoints.
    """
    monthly = require_positive("monthly", monthly)
    rate = require_non_negative("rate", rate)
    years = require_whole_years("years", years)

    if years == 0:
        return {
            "investedAmount": 0,
            "maturityAmount": 0,
            "profit": 0,
            "yearlyPoints": empty_series("invested", "total"),
        }

    i = monthly_rate(rate)
    points = []
    for year in range(1, years + 1):
        months = years_in_months(year)
        points.append({
            "year": year,
            "invested": monthly * months,
            "total": sip_future_value(monthly, i, months),
        })

    invested = round_rupee(points[-1]["invested"])
    maturity = round_rupee(points[-1]["total"])
    return {
        "investedAmount": invested,
        "maturityAmount": maturity,
        "profit": maturity - invested,
        "yearlyPoints": points,
    }


# ── Lumpsum ───────────────────────────────────────────────────────────────

def calculate_lumpsum(amount: float, rate: float, years: int) -> dict:
    """One-time investment compounded monthly."""
    amount = require_positive("amount", amount)
    rate = require_non_negative("rate", rate)
    years = require_whole_years("years", years)

    if years == 0:
        return {
            "investedAmount": 0,
            "maturityAmount": 0,
            "profit": 0,
            "yearlyPoints": empty_series("invested", "total"),
        }

    i = monthly_rate(rate)
    points = [
        {
            "year": year,
            "invested": amount,
            "total": compound_monthly(amount, i, years_in_months(year)),
        }
        for year in range(1, years + 1)
    ]

    invested = round_rupee(amount)
    maturity = round_rupee(points[-1]["total"])
    return {
        "investedAmount": invested,
        "maturityAmount": maturity,
        "profit": maturity - invested,
        "yearlyPoints": points,
    }


# ── Step-up SIP ───────────────────────────────────────────────────────────

def _sip_for_year(start: float, year: int, step_type: StepType, step_value: float) -> float:
    if step_type is StepType.PERCENT:
        return start * ((1 + step_value / 100) ** (year - 1))
    return start + step_value * (year - 1)


def calculate_step_up_sip(
    monthly: float,
    rate: float,
    years: int,
    step_type: StepType | str = StepType.PERCENT,
    step_value: float = 0.0,
) -> dict:
    """SIP whose instalment rises every year by a percent or a fixed amount.

    Each year's twelve instalments compound monthly on top of the balance
    carried forward from the previous year.
    """
    monthly = require_positive("monthly", monthly)
    rate = require_non_negative("rate", rate)
    years = require_whole_years("years", years)
    step_value = require_non_negative("stepValue", step_value)
    try:
        step_type = StepType(step_type)
    except ValueError:
        raise InvalidInputError(f"stepType must be PERCENT or FIXED, got {step_type!r}") from None

    i = monthly_rate(rate)
    balance = 0.0
    invested = 0.0
    points = []
    for year in range(1, years + 1):
        sip = _sip_for_year(monthly, year, step_type, step_value)
        for _ in range(MONTHS_PER_YEAR):
            balance = (balance + sip) * (1 + i)
            invested += sip
        points.append({
            "year": year,
            "monthlySip": sip,
            "investedAmount": invested,
            "corpusValue": balance,
        })
    if not points:
        points = empty_series("monthlySip", "investedAmount", "corpusValue")

    total_invested = round_rupee(invested)
    maturity = round_rupee(balance)
    step_label = (
        f"{step_value:g}% every year" if step_type is StepType.PERCENT
        else f"{format_inr(step_value)} every year"
    )
    return {
        "calculator": "STEP_UP_SIP",
        "currency": "INR",
        "startMonthlySip": round_rupee(monthly),
        "annualRatePercent": rate,
        "years": years,
        "stepType": step_type.value,
        "stepPercent": step_value if step_type is StepType.PERCENT else 0.0,
        "stepAmount": step_value if step_type is StepType.FIXED else 0.0,
        "totalInvestedAmount": total_invested,
        "maturityAmount": maturity,
        "totalGain": maturity - total_invested,
        "inputSummary": (
            f"Starting SIP {format_inr(monthly)} per month for {years} years at "
            f"{rate:g}% p.a., stepped up by {step_label}."
        ),
        "explanation": (
            f"You invest {format_inr(total_invested)} in total and the corpus may grow to "
            f"{format_inr(maturity)}, a gain of {format_inr(maturity - total_invested)}."
        ),
        "yearlyPoints": points,
    }


# ── SIP per day (goal seeking) ────────────────────────────────────────────

def calculate_sip_per_day(goal: float, rate: float, years: int) -> dict:
    """Monthly SIP and daily saving needed to reach *goal* in *years*.

    The daily figure divides the monthly SIP by a flat 30 days.
    """
    goal = require_positive("goal", goal)
    rate = require_non_negative("rate", rate)
    years = require_whole_years("years", years)

    i = monthly_rate(rate)
    months = years_in_months(years)
    monthly = required_monthly_sip(goal, i, months)

    points = [
        {
            "year": year,
            "investedAmount": monthly * years_in_months(year),
            "corpusValue": sip_future_value(monthly, i, years_in_months(year)),
        }
        for year in range(1, years + 1)
    ] or empty_series("investedAmount", "corpusValue")

    daily = monthly / DAYS_PER_MONTH
    total_invested = round_rupee(monthly * months)
    maturity = round_rupee(points[-1]["corpusValue"])
    return {
        "calculator": "SIP_PER_DAY",
        "currency": "INR",
        "targetCorpus": round_rupee(goal),
        "annualRatePercent": rate,
        "years": years,
        "requiredMonthlySip": round_rupee(monthly),
        "requiredDailySaving": round_rupee(daily),
        "totalInvestedAmount": total_invested,
        "expectedMaturityAmount": maturity,
        "inputSummary": (
            f"Target corpus {format_inr(goal)} in {years} years at {rate:g}% p.a."
        ),
        "explanation": (
            f"Save about {format_inr(daily)} a day ({format_inr(monthly)} a month, "
            f"assuming {DAYS_PER_MONTH}-day months) to build {format_inr(maturity)}."
        ),
        "yearlyPoints": points,
    }


# ── CAGR ──────────────────────────────────────────────────────────────────

def cagr(initial: float, final: float, years: float) -> float:
    """Compound annual growth rate as a decimal fraction."""
    return (final / initial) ** (1 / years) - 1


def calculate_cagr(initial: float, final: float, years: float) -> dict:
    """CAGR for a holding period that may be fractional.

    The series runs from year 0 to the last whole year; a fractional period
    adds a closing point at exactly *years* so the series ends on *final*.
    """
    initial = require_positive("initial", initial)
    final = require_positive("final", final)
    years = require_positive("years", years)

    try:
        rate = cagr(initial, final, years)
        points = [
            {"year": year, "value": initial * ((1 + rate) ** year)}
            for year in range(0, int(years) + 1)
        ]
        if not float(years).is_integer():
            points.append({"year": years, "value": initial * ((1 + rate) ** years)})
    except OverflowError:
        raise InvalidInputError(
            f"years: {years:g} is too short to annualise a {final / initial:g}x change"
        ) from None

    return {
        "initialAmount": round_rupee(initial),
        "finalAmount": round_rupee(final),
        "years": years,
        "cagrPercent": round_currency(rate * 100),
        "totalReturnPercent": round_currency((final / initial - 1) * 100),
        "totalGain": round_rupee(final) - round_rupee(initial),
        "yearlyPoints": points,
    }
