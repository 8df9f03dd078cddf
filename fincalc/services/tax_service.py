"""Indian income-tax calculations on fixed progressive slabs.

New regime:
    ₹0 – ₹3,00,000           → 0 %
    ₹3,00,001 – ₹7,00,000    → 5 %
    ₹7,00,001 – ₹10,00,000   → 10 %
    ₹10,00,001 – ₹12,00,000  → 15 %
    ₹12,00,001 – ₹15,00,000  → 20 %
    Above ₹15,00,000          → 30 %

Old regime:
    ₹0 – ₹2,50,000           → 0 %
    ₹2,50,001 – ₹5,00,000    → 5 %
    ₹5,00,001 – ₹10,00,000   → 20 %
    Above ₹10,00,000          → 30 %

Health & education cess of 4 % is levied on the slab tax.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple

from fincalc.errors import InvalidInputError
from fincalc.utils.helpers import require_positive, round_currency, round_rupee


class TaxRegime(str, Enum):
    NEW = "new"
    OLD = "old"


# (lower_bound, upper_bound, marginal_rate)
_SLABS: Dict[TaxRegime, List[Tuple[float, float, float]]] = {
    TaxRegime.NEW: [
        (0.0, 300_000.0, 0.00),
        (300_000.0, 700_000.0, 0.05),
        (700_000.0, 1_000_000.0, 0.10),
        (1_000_000.0, 1_200_000.0, 0.15),
        (1_200_000.0, 1_500_000.0, 0.20),
        (1_500_000.0, float("inf"), 0.30),
    ],
    TaxRegime.OLD: [
        (0.0, 250_000.0, 0.00),
        (250_000.0, 500_000.0, 0.05),
        (500_000.0, 1_000_000.0, 0.20),
        (1_000_000.0, float("inf"), 0.30),
    ],
}

CESS_RATE = 0.04


def slab_breakdown(taxable_income: float, regime: TaxRegime = TaxRegime.NEW) -> List[dict]:
    """Tax contributed by each slab the income reaches, lowest first."""
    rows: list[dict] = []
    for lower, upper, rate in _SLABS[regime]:
        if taxable_income <= lower:
            break
        taxable_in_slab = min(taxable_income, upper) - lower
        rows.append({
            "lower": lower,
            "upper": None if upper == float("inf") else upper,
            "ratePercent": round_currency(rate * 100),
            "taxableAmount": taxable_in_slab,
            "tax": taxable_in_slab * rate,
        })
    return rows


def calculate_tax(taxable_income: float, regime: TaxRegime = TaxRegime.NEW) -> float:
    """Slab tax before cess (rounded to 2 dp); 0 for non-positive income."""
    if taxable_income <= 0:
        return 0.0
    return round_currency(sum(row["tax"] for row in slab_breakdown(taxable_income, regime)))


def calculate_income_tax(income: float, regime: TaxRegime | str = TaxRegime.NEW) -> dict:
    """Total tax with cess, net income and effective rate.

    Returns dict with keys: income, regime, taxBeforeCess, cess, tax,
    netIncome, effectiveRate, slabs.
    """
    income = require_positive("income", income)
    if not isinstance(regime, TaxRegime):
        try:
            regime = TaxRegime(str(regime).strip().lower())
        except ValueError:
            raise InvalidInputError(f"regime must be 'new' or 'old', got {regime!r}") from None

    slab_tax = calculate_tax(income, regime)
    tax_before_cess = round_rupee(slab_tax)
    cess = round_rupee(slab_tax * CESS_RATE)
    tax = tax_before_cess + cess
    return {
        "income": round_rupee(income),
        "regime": regime.value,
        "taxBeforeCess": tax_before_cess,
        "cess": cess,
        "tax": tax,
        "netIncome": round_rupee(income) - tax,
        "effectiveRate": round_currency(tax / income * 100),
        "slabs": slab_breakdown(income, regime),
    }
