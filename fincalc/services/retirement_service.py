"""Retirement corpus projection and Systematic Withdrawal Plan (SWP).

Retirement (monthly, contribution at the start of the month):
    corpus = (corpus + A) × (1 + i)
    corpus_real = corpus / (1 + inflation)^years_elapsed

SWP (monthly):
    balance = balance × (1 + i) − withdrawal,  clamped at 0

i = rate / 12 / 100.
"""

from __future__ import annotations

from typing import Optional

from fincalc.errors import InvalidInputError
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


def adjust_for_inflation(amount: float, inflation: float, years: float) -> float:
    """A_real = A / (1 + inflation)^t, *inflation* in percent."""
    if inflation <= 0 or years <= 0:
        return amount
    return amount / ((1 + inflation / 100) ** years)


# ── Retirement corpus ─────────────────────────────────────────────────────

def calculate_retirement(
    current_age: int,
    retirement_age: int,
    monthly_investment: float,
    current_corpus: float = 0.0,
    expected_return: float = 0.0,
    inflation: float = 0.0,
) -> dict:
    """Project the corpus at retirement from an existing corpus plus a monthly SIP.

    The age series starts at *current_age* (the existing corpus) and has one
    point per year of age up to *retirement_age*.
    """
    current_age = require_whole_years("currentAge", current_age)
    retirement_age = require_whole_years("retirementAge", retirement_age)
    monthly_investment = require_positive("monthlyInvestment", monthly_investment)
    current_corpus = require_non_negative("currentCorpus", current_corpus)
    expected_return = require_non_negative("expectedReturn", expected_return)
    inflation = require_non_negative("inflation", inflation)
    if current_age <= 0:
        raise InvalidInputError("currentAge must be greater than 0")
    if retirement_age < current_age:
        raise InvalidInputError(
            f"retirementAge ({retirement_age}) must not be before currentAge ({current_age})"
        )

    years = retirement_age - current_age
    summary = {
        "currentAge": current_age,
        "retirementAge": retirement_age,
        "yearsToInvest": years,
        "monthlyInvestment": round_rupee(monthly_investment),
        "currentCorpus": round_rupee(current_corpus),
        "expectedReturnPercent": expected_return,
        "inflationPercent": inflation,
    }
    if years == 0:
        summary.update({
            "totalInvestment": 0,
            "totalGain": 0,
            "estimatedCorpusAtRetirement": 0,
            "corpusInTodayValue": 0,
            "yearlyPoints": empty_series(
                "invested", "corpus", "corpusReal", period_key="age", start=current_age
            ),
        })
        return summary

    i = monthly_rate(expected_return)
    corpus = current_corpus
    invested = current_corpus
    points = [{
        "age": current_age,
        "invested": invested,
        "corpus": corpus,
        "corpusReal": corpus,
    }]
    for year in range(1, years + 1):
        for _ in range(MONTHS_PER_YEAR):
            corpus = (corpus + monthly_investment) * (1 + i)
            invested += monthly_investment
        points.append({
            "age": current_age + year,
            "invested": invested,
            "corpus": corpus,
            "corpusReal": adjust_for_inflation(corpus, inflation, year),
        })

    total_investment = round_rupee(invested)
    estimated = round_rupee(corpus)
    summary.update({
        "totalInvestment": total_investment,
        "totalGain": estimated - total_investment,
        "estimatedCorpusAtRetirement": estimated,
        "corpusInTodayValue": round_rupee(points[-1]["corpusReal"]),
        "yearlyPoints": points,
    })
    return summary


# ── Systematic Withdrawal Plan ────────────────────────────────────────────

def calculate_swp(corpus: float, withdrawal: float, rate: float, years: int) -> dict:
    """Withdraw a fixed amount every month from a corpus still earning *rate*.

    When the grown balance can no longer cover a full withdrawal the remainder
    is paid out and the balance stays at 0; ``depletionMonth`` records when.
    """
    corpus = require_positive("corpus", corpus)
    withdrawal = require_positive("withdrawal", withdrawal)
    rate = require_non_negative("rate", rate)
    years = require_whole_years("years", years)

    if years == 0:
        return {
            "initialCorpus": round_rupee(corpus),
            "monthlyWithdrawal": round_rupee(withdrawal),
            "annualRatePercent": rate,
            "years": 0,
            "totalWithdrawn": 0,
            "endingCorpus": 0,
            "totalGrowth": 0,
            "depletionMonth": None,
            "yearlyPoints": empty_series("balance", "totalWithdrawn"),
        }

    i = monthly_rate(rate)
    balance = corpus
    withdrawn = 0.0
    depletion_month: Optional[int] = None
    points = []
    for month in range(1, years_in_months(years) + 1):
        balance *= 1 + i
        payout = min(withdrawal, balance)
        balance -= payout
        withdrawn += payout
        if balance <= 0:
            balance = 0.0
            if depletion_month is None:
                depletion_month = month
        if month % MONTHS_PER_YEAR == 0:
            points.append({
                "year": month // MONTHS_PER_YEAR,
                "balance": balance,
                "totalWithdrawn": withdrawn,
            })

    ending = round_rupee(balance)
    total_withdrawn = round_rupee(withdrawn)
    return {
        "initialCorpus": round_rupee(corpus),
        "monthlyWithdrawal": round_rupee(withdrawal),
        "annualRatePercent": rate,
        "years": years,
        "totalWithdrawn": total_withdrawn,
        "endingCorpus": ending,
        "totalGrowth": ending + total_withdrawn - round_rupee(corpus),
        "depletionMonth": depletion_month,
        "yearlyPoints": points,
    }
