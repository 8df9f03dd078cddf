"""Bank and small-savings deposit calculations — FD, RD and PPF.

Fixed Deposit (quarterly):      M = P × (1 + r/4)^(4t)
Recurring Deposit (monthly):    M = A × [((1 + i)^n − 1) / i] × (1 + i)
Public Provident Fund (annual): M = A × [((1 + r)^n − 1) / r] × (1 + r)

r = rate / 100,  i = rate / 12 / 100,  n = number of instalments.
"""

from __future__ import annotations

from fincalc.services.investment_service import sip_future_value
from fincalc.utils.helpers import (
    empty_series,
    monthly_rate,
    require_non_negative,
    require_positive,
    require_whole_years,
    round_rupee,
    years_in_months,
)

FD_COMPOUNDING_PER_YEAR = 4


def fd_maturity(principal: float, rate: float, years: float) -> float:
    """M = P × (1 + r/q)^(q·t) with quarterly compounding."""
    q = FD_COMPOUNDING_PER_YEAR
    return principal * ((1 + rate / 100 / q) ** (q * years))


def ppf_maturity(yearly: float, rate: float, years: int) -> float:
    """Annuity-due maturity of *years* start-of-year contributions."""
    r = rate / 100
    if r == 0:
        return yearly * years
    return yearly * (((1 + r) ** years - 1) / r) * (1 + r)


# ── Fixed Deposit ─────────────────────────────────────────────────────────

def calculate_fd(amount: float, rate: float, years: int) -> dict:
    """Returns dict with keys: investedAmount, maturityAmount, interestEarned, yearlyPoints."""
    amount = require_positive("amount", amount)
    rate = require_non_negative("rate", rate)
    years = require_whole_years("years", years)

    if years == 0:
        return {
            "investedAmount": 0,
            "maturityAmount": 0,
            "interestEarned": 0,
            "yearlyPoints": empty_series("invested", "total"),
        }

    points = [
        {"year": year, "invested": amount, "total": fd_maturity(amount, rate, year)}
        for year in range(1, years + 1)
    ]

    invested = round_rupee(amount)
    maturity = round_rupee(points[-1]["total"])
    return {
        "investedAmount": invested,
        "maturityAmount": maturity,
        "interestEarned": maturity - invested,
        "yearlyPoints": points,
    }


# ── Recurring Deposit ─────────────────────────────────────────────────────

def calculate_rd(monthly: float, rate: float, years: int) -> dict:
    monthly = require_positive("monthly", monthly)
    rate = require_non_negative("rate", rate)
    years = require_whole_years("years", years)

    i = monthly_rate(rate)
    points = [
        {
            "year": year,
            "invested": monthly * years_in_months(year),
            "total": sip_future_value(monthly, i, years_in_months(year)),
        }
        for year in range(1, years + 1)
    ] or empty_series("invested", "total")

    invested = round_rupee(points[-1]["invested"])
    maturity = round_rupee(points[-1]["total"])
    return {
        "monthlyInstallment": round_rupee(monthly),
        "annualRatePercent": rate,
        "years": years,
        "investedAmount": invested,
        "maturityAmount": maturity,
        "interestEarned": maturity - invested,
        "yearlyPoints": points,
    }


# ── Public Provident Fund ─────────────────────────────────────────────────

def calculate_ppf(yearly: float, rate: float, years: int) -> dict:
    """PPF maturity for a fixed yearly contribution made at the start of each year.

    The statutory 15-year lock-in is not enforced; any tenure is computed.
    """
    yearly = require_positive("yearly", yearly)
    rate = require_non_negative("rate", rate)
    years = require_whole_years("years", years)

    points = [
        {"year": year, "invested": yearly * year, "total": ppf_maturity(yearly, rate, year)}
        for year in range(1, years + 1)
    ] or empty_series("invested", "total")

    invested = round_rupee(points[-1]["invested"])
    maturity = round_rupee(points[-1]["total"])
    return {
        "calculator": "PPF",
        "currency": "INR",
        "yearlyContribution": round_rupee(yearly),
        "annualRatePercent": rate,
        "years": years,
        "investedAmount": invested,
        "maturityAmount": maturity,
        "interestEarned": maturity - invested,
        "yearlyPoints": points,
    }
