"""Loan EMI and amortization.

EMI = P × r × (1 + r)^n / ((1 + r)^n − 1),   r = rate / 12 / 100,  n = years × 12

At r = 0 the EMI is simply P / n. The amortization schedule walks the loan
month by month: interest accrues on the outstanding balance and the rest of
the EMI repays principal.
"""

from __future__ import annotations

from typing import List

from fincalc.utils.helpers import (
    MONTHS_PER_YEAR,
    empty_series,
    monthly_rate,
    require_non_negative,
    require_positive,
    require_whole_years,
    round_rupee,
    years_in_months,
)


def emi_amount(principal: float, rate_per_month: float, months: int) -> float:
    if months == 0:
        return 0.0
    if rate_per_month == 0:
        return principal / months
    growth = (1 + rate_per_month) ** months
    return principal * rate_per_month * growth / (growth - 1)


def amortization_schedule(amount: float, rate: float, years: int) -> List[dict]:
    """Month-by-month schedule: month, emi, principalPaid, interestPaid, balance.

    Every row satisfies ``principalPaid + interestPaid == emi``; the balance
    is clamped at 0 so floating-point residue never shows as a negative loan.
    """
    amount = require_positive("amount", amount)
    rate = require_non_negative("rate", rate)
    years = require_whole_years("years", years)

    r = monthly_rate(rate)
    months = years_in_months(years)
    emi = emi_amount(amount, r, months)

    balance = amount
    rows: list[dict] = []
    for month in range(1, months + 1):
        interest = balance * r
        principal = emi - interest
        balance = max(balance - principal, 0.0)
        rows.append({
            "month": month,
            "emi": emi,
            "principalPaid": principal,
            "interestPaid": interest,
            "balance": balance,
        })
    return rows


def calculate_emi(amount: float, rate: float, years: int) -> dict:
    """EMI summary plus yearly buckets of cumulative principal and interest.

    Returns dict with keys: loanAmount, annualRatePercent, years, emiPerMonth,
    totalPayment, totalInterest, yearlyPoints.
    """
    schedule = amortization_schedule(amount, rate, years)
    years = int(years)

    if not schedule:
        return {
            "loanAmount": round_rupee(amount),
            "annualRatePercent": rate,
            "years": years,
            "emiPerMonth": 0,
            "totalPayment": 0,
            "totalInterest": 0,
            "yearlyPoints": empty_series("principalPaid", "interestPaid", "balanceOutstanding"),
        }

    points = []
    principal_paid = 0.0
    interest_paid = 0.0
    for row in schedule:
        principal_paid += row["principalPaid"]
        interest_paid += row["interestPaid"]
        if row["month"] % MONTHS_PER_YEAR == 0:
            points.append({
                "year": row["month"] // MONTHS_PER_YEAR,
                "principalPaid": principal_paid,
                "interestPaid": interest_paid,
                "balanceOutstanding": row["balance"],
            })

    emi = schedule[0]["emi"]
    total_payment = round_rupee(emi * len(schedule))
    return {
        "loanAmount": round_rupee(amount),
        "annualRatePercent": rate,
        "years": years,
        "emiPerMonth": round_rupee(emi),
        "totalPayment": total_payment,
        "totalInterest": total_payment - round_rupee(amount),
        "yearlyPoints": points,
    }
