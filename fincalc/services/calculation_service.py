"""Scenario orchestration: raw form inputs → validated → computed result.

    run_calculation(ProductType.SIP, {"monthly": "5,000", "rate": "12", "years": "10"})

1. Drop blank values so they count as missing.
2. Validate & normalise through the product's pydantic input model.
3. Dispatch to the matching formula.
4. Wrap the summary and series in a frozen ``CalculationResult``.

Everything here is synchronous and side-effect free apart from logging.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Type, Union

from pydantic import ValidationError

from fincalc.errors import InvalidInputError
from fincalc.models.schemas import (
    CagrInputs,
    CalculationResult,
    CalculatorInputs,
    EmiInputs,
    FdInputs,
    LumpsumInputs,
    PortfolioInputs,
    PpfInputs,
    ProductType,
    RdInputs,
    RetirementInputs,
    SipInputs,
    SipPerDayInputs,
    StepUpSipInputs,
    SwpInputs,
    TaxInputs,
)
from fincalc.services.deposit_service import calculate_fd, calculate_ppf, calculate_rd
from fincalc.services.investment_service import (
    calculate_cagr,
    calculate_lumpsum,
    calculate_sip,
    calculate_sip_per_day,
    calculate_step_up_sip,
)
from fincalc.services.loan_service import calculate_emi
from fincalc.services.portfolio_service import calculate_portfolio_return
from fincalc.services.retirement_service import calculate_retirement, calculate_swp
from fincalc.services.tax_service import calculate_income_tax

logger = logging.getLogger(__name__)


class _Calculator(NamedTuple):
    inputs: Type[CalculatorInputs]
    compute: Callable[[Any], Dict[str, Any]]


_CALCULATORS: Dict[ProductType, _Calculator] = {
    ProductType.SIP: _Calculator(
        SipInputs, lambda v: calculate_sip(v.monthly, v.rate, v.years)
    ),
    ProductType.LUMPSUM: _Calculator(
        LumpsumInputs, lambda v: calculate_lumpsum(v.amount, v.rate, v.years)
    ),
    ProductType.FD: _Calculator(
        FdInputs, lambda v: calculate_fd(v.amount, v.rate, v.years)
    ),
    ProductType.RD: _Calculator(
        RdInputs, lambda v: calculate_rd(v.monthly, v.rate, v.years)
    ),
    ProductType.PPF: _Calculator(
        PpfInputs, lambda v: calculate_ppf(v.yearly, v.rate, v.years)
    ),
    ProductType.EMI: _Calculator(
        EmiInputs, lambda v: calculate_emi(v.amount, v.rate, v.years)
    ),
    ProductType.CAGR: _Calculator(
        CagrInputs, lambda v: calculate_cagr(v.initial, v.final, v.years)
    ),
    ProductType.RETIREMENT: _Calculator(
        RetirementInputs,
        lambda v: calculate_retirement(
            current_age=v.currentAge,
            retirement_age=v.retirementAge,
            monthly_investment=v.monthlyInvestment,
            current_corpus=v.currentCorpus,
            expected_return=v.expectedReturn,
            inflation=v.inflation,
        ),
    ),
    ProductType.SWP: _Calculator(
        SwpInputs, lambda v: calculate_swp(v.corpus, v.withdrawal, v.rate, v.years)
    ),
    ProductType.STEP_UP_SIP: _Calculator(
        StepUpSipInputs,
        lambda v: calculate_step_up_sip(v.monthly, v.rate, v.years, v.stepType, v.stepValue),
    ),
    ProductType.SIP_PER_DAY: _Calculator(
        SipPerDayInputs, lambda v: calculate_sip_per_day(v.goal, v.rate, v.years)
    ),
    ProductType.TAX: _Calculator(
        TaxInputs, lambda v: calculate_income_tax(v.income, v.regime)
    ),
    ProductType.PORTFOLIO_RETURN: _Calculator(
        PortfolioInputs,
        lambda v: calculate_portfolio_return(
            [fund.model_dump() for fund in v.funds], v.asOfDate
        ),
    ),
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _format_errors(exc: ValidationError) -> List[str]:
    """One readable message per offending field."""
    messages: list[str] = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        message = error["msg"].removeprefix("Value error, ")
        messages.append(f"{field}: {message}" if field else message)
    return messages


def resolve_product(product: Union[ProductType, str]) -> ProductType:
    if isinstance(product, ProductType):
        return product
    try:
        return ProductType(str(product).strip().lower())
    except ValueError:
        raise InvalidInputError(f"Unknown calculator: {product!r}") from None


def validate_inputs(product: Union[ProductType, str], raw_inputs: Mapping[str, Any]) -> CalculatorInputs:
    """Normalise and validate *raw_inputs* for *product* without computing."""
    calculator = _CALCULATORS[resolve_product(product)]
    cleaned = {key: value for key, value in raw_inputs.items() if not _is_blank(value)}
    try:
        return calculator.inputs.model_validate(cleaned)
    except ValidationError as exc:
        raise InvalidInputError(_format_errors(exc)) from None


def run_calculation(
    product: Union[ProductType, str],
    raw_inputs: Mapping[str, Any],
) -> CalculationResult:
    """Validate *raw_inputs*, run the *product* formula and package the result.

    Raises ``InvalidInputError`` before any computation when an input is
    missing, non-numeric, non-finite or out of range, and after it when the
    inputs drive a formula past float range.
    """
    product = resolve_product(product)
    try:
        inputs = validate_inputs(product, raw_inputs)
    except InvalidInputError as exc:
        logger.info("Rejected %s inputs: %s", product.value, exc)
        raise

    logger.debug("Running %s calculation with %s", product.value, inputs.model_dump())
    try:
        summary = _CALCULATORS[product].compute(inputs)
    except OverflowError:
        logger.info("Rejected %s inputs: result out of numeric range", product.value)
        raise InvalidInputError(
            f"{product.value}: these inputs produce a value too large to compute"
        ) from None
    series = summary.pop("yearlyPoints", None)
    return CalculationResult(product=product, summary=summary, yearlyPoints=series)
