"""Portfolio return from user-entered holdings.

Each holding carries its invested amount, current value and investment date.
Per holding:
    holding_years = (as_of − investment_date).days / 365
    cagr          = (current / invested)^(1 / holding_years) − 1

Portfolio CAGR uses total current / total invested over the invested-weighted
average holding period. Holdings younger than a day contribute to totals but
report a CAGR of 0.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Mapping

from fincalc.errors import InvalidInputError
from fincalc.services.investment_service import cagr
from fincalc.utils.helpers import require_positive, round_currency, round_rupee

DAYS_PER_YEAR = 365


def _holding_years(invested_on: date, as_of: date) -> float:
    return (as_of - invested_on).days / DAYS_PER_YEAR


def calculate_portfolio_return(holdings: Iterable[Mapping], as_of: date) -> dict:
    """Aggregate invested/current value, profit, weights and CAGR.

    *holdings* are mappings with keys schemeName, amcName, category,
    investmentDate (``date``), investedAmount, currentValue.
    """
    funds: List[dict] = []
    errors: List[str] = []
    for index, holding in enumerate(holdings):
        label = holding.get("schemeName") or f"funds[{index}]"
        try:
            invested = require_positive(f"{label}.investedAmount", holding.get("investedAmount"))
            current = require_positive(f"{label}.currentValue", holding.get("currentValue"))
        except InvalidInputError as exc:
            errors.extend(exc.errors)
            continue
        invested_on = holding.get("investmentDate")
        if not isinstance(invested_on, date):
            errors.append(f"{label}.investmentDate must be a date")
            continue
        if invested_on > as_of:
            errors.append(f"{label}.investmentDate {invested_on} is after {as_of}")
            continue

        years = _holding_years(invested_on, as_of)
        try:
            fund_cagr = cagr(invested, current, years) * 100 if years > 0 else 0.0
        except OverflowError:
            errors.append(
                f"{label}: a {current / invested:g}x change over {(as_of - invested_on).days} day(s) "
                "is too large to annualise"
            )
            continue
        funds.append({
            "schemeName": holding.get("schemeName", ""),
            "amcName": holding.get("amcName", ""),
            "category": holding.get("category", ""),
            "investmentDate": invested_on.isoformat(),
            "investedAmount": invested,
            "currentValue": current,
            "profit": current - invested,
            "cagrPercent": fund_cagr,
            "holdingYears": years,
        })

    if errors:
        raise InvalidInputError(errors)
    if not funds:
        raise InvalidInputError("funds must contain at least one holding")

    total_invested = sum(f["investedAmount"] for f in funds)
    total_current = sum(f["currentValue"] for f in funds)
    weighted_years = sum(f["investedAmount"] * f["holdingYears"] for f in funds) / total_invested
    try:
        portfolio_cagr = (
            cagr(total_invested, total_current, weighted_years) if weighted_years > 0 else 0.0
        )
    except OverflowError:
        raise InvalidInputError(
            "funds: the portfolio change is too large to annualise over its holding period"
        ) from None

    for fund in funds:
        fund["weightPercent"] = round_currency(fund["currentValue"] / total_current * 100)
        fund["cagrPercent"] = round_currency(fund["cagrPercent"])
        fund["holdingYears"] = round_currency(fund["holdingYears"])
        for key in ("investedAmount", "currentValue", "profit"):
            fund[key] = round_rupee(fund[key])

    return {
        "calculator": "PORTFOLIO_RETURN",
        "currency": "INR",
        "asOfDate": as_of.isoformat(),
        "totalInvested": round_rupee(total_invested),
        "totalCurrentValue": round_rupee(total_current),
        "totalProfit": round_rupee(total_current) - round_rupee(total_invested),
        "portfolioCagrPercent": round_currency(portfolio_cagr * 100),
        "funds": funds,
        "allocationChart": [
            {"schemeName": f["schemeName"], "weightPercent": f["weightPercent"]} for f in funds
        ],
    }
