"""Routers for calculator endpoints (query parameters as the frontend sends them):
    GET   /api/sip            monthly, rate, years
    GET   /api/lumpsum        amount, rate, years
    GET   /api/fd             amount, rate, years
    GET   /api/rd             monthly, rate, years
    GET   /api/ppf            yearly, rate, years
    GET   /api/emi            amount, rate, years
    GET   /api/cagr           initial, final, years
    GET   /api/retirement     currentAge, retirementAge, monthlyInvestment,
                              currentCorpus, expectedReturn, inflation
    GET   /api/swp            corpus, withdrawal, rate, years
    GET   /api/step-up-sip    monthly, years, rate, stepType, stepValue
    GET   /api/sip-per-day    goal, years, rate
    GET   /api/tax            income, regime
    POST  /api/mf/portfolio-return
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Query

from fincalc.config import settings
from fincalc.database import record_calculation
from fincalc.models.schemas import (
    CagrResponse,
    EmiResponse,
    FdResponse,
    LumpsumResponse,
    PortfolioRequest,
    PortfolioReturnResponse,
    PpfResponse,
    ProductType,
    RdResponse,
    RetirementResponse,
    SipPerDayResponse,
    SipResponse,
    StepUpSipResponse,
    SwpResponse,
    TaxResponse,
)
from fincalc.services.calculation_service import run_calculation

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=settings.API_PREFIX,
    tags=["Calculators"],
)


# ── Shared pipeline ──────────────────────────────────────────────────────

async def _serve(product: ProductType, params: Dict[str, Any]) -> Dict[str, Any]:
    """Run the engine, audit the call, and return the wire payload.

    ``InvalidInputError`` propagates to the app-level 422 handler.
    """
    result = run_calculation(product, params)
    await record_calculation(product.value, params, result.summary)
    return result.to_payload()


# ── Growth calculators ───────────────────────────────────────────────────

@router.get("/sip", response_model=SipResponse, summary="Monthly SIP maturity")
async def sip(
    monthly: Optional[str] = Query(None, description="Monthly instalment (₹, commas allowed)"),
    rate: Optional[str] = Query(None, description="Expected annual return in %"),
    years: Optional[str] = Query(None, description="Investment period in years"),
):
    return await _serve(ProductType.SIP, {"monthly": monthly, "rate": rate, "years": years})


@router.get("/lumpsum", response_model=LumpsumResponse, summary="One-time investment growth")
async def lumpsum(
    amount: Optional[str] = Query(None),
    rate: Optional[str] = Query(None),
    years: Optional[str] = Query(None),
):
    return await _serve(ProductType.LUMPSUM, {"amount": amount, "rate": rate, "years": years})


@router.get("/step-up-sip", response_model=StepUpSipResponse, summary="SIP with yearly step-up")
async def step_up_sip(
    monthly: Optional[str] = Query(None),
    years: Optional[str] = Query(None),
    rate: Optional[str] = Query(None),
    step_type: Optional[str] = Query(None, alias="stepType", description="PERCENT or FIXED"),
    step_value: Optional[str] = Query(None, alias="stepValue"),
):
    return await _serve(
        ProductType.STEP_UP_SIP,
        {
            "monthly": monthly,
            "years": years,
            "rate": rate,
            "stepType": step_type,
            "stepValue": step_value,
        },
    )


@router.get("/sip-per-day", response_model=SipPerDayResponse, summary="Daily saving for a goal")
async def sip_per_day(
    goal: Optional[str] = Query(None, description="Target corpus (₹)"),
    years: Optional[str] = Query(None),
    rate: Optional[str] = Query(None),
):
    return await _serve(ProductType.SIP_PER_DAY, {"goal": goal, "years": years, "rate": rate})


@router.get("/cagr", response_model=CagrResponse, summary="Compound annual growth rate")
async def cagr(
    initial: Optional[str] = Query(None),
    final: Optional[str] = Query(None),
    years: Optional[str] = Query(None, description="Holding period, may be fractional"),
):
    return await _serve(ProductType.CAGR, {"initial": initial, "final": final, "years": years})


# ── Deposits ─────────────────────────────────────────────────────────────

@router.get("/fd", response_model=FdResponse, summary="Fixed deposit, quarterly compounding")
async def fd(
    amount: Optional[str] = Query(None),
    rate: Optional[str] = Query(None),
    years: Optional[str] = Query(None),
):
    return await _serve(ProductType.FD, {"amount": amount, "rate": rate, "years": years})


@router.get("/rd", response_model=RdResponse, summary="Recurring deposit")
async def rd(
    monthly: Optional[str] = Query(None),
    rate: Optional[str] = Query(None),
    years: Optional[str] = Query(None),
):
    return await _serve(ProductType.RD, {"monthly": monthly, "rate": rate, "years": years})


@router.get("/ppf", response_model=PpfResponse, summary="Public Provident Fund")
async def ppf(
    yearly: Optional[str] = Query(None),
    rate: Optional[str] = Query(None),
    years: Optional[str] = Query(None),
):
    return await _serve(ProductType.PPF, {"yearly": yearly, "rate": rate, "years": years})


# ── Loans ────────────────────────────────────────────────────────────────

@router.get("/emi", response_model=EmiResponse, summary="Loan EMI and yearly amortization")
async def emi(
    amount: Optional[str] = Query(None),
    rate: Optional[str] = Query(None),
    years: Optional[str] = Query(None),
):
    return await _serve(ProductType.EMI, {"amount": amount, "rate": rate, "years": years})


# ── Retirement & withdrawals ─────────────────────────────────────────────

@router.get("/retirement", response_model=RetirementResponse, summary="Retirement corpus")
async def retirement(
    current_age: Optional[str] = Query(None, alias="currentAge"),
    retirement_age: Optional[str] = Query(None, alias="retirementAge"),
    monthly_investment: Optional[str] = Query(None, alias="monthlyInvestment"),
    current_corpus: Optional[str] = Query(None, alias="currentCorpus"),
    expected_return: Optional[str] = Query(None, alias="expectedReturn"),
    inflation: Optional[str] = Query(None),
):
    return await _serve(
        ProductType.RETIREMENT,
        {
            "currentAge": current_age,
            "retirementAge": retirement_age,
            "monthlyInvestment": monthly_investment,
            "currentCorpus": current_corpus,
            "expectedReturn": expected_return,
            "inflation": inflation,
        },
    )


@router.get("/swp", response_model=SwpResponse, summary="Systematic withdrawal plan")
async def swp(
    corpus: Optional[str] = Query(None),
    withdrawal: Optional[str] = Query(None),
    rate: Optional[str] = Query(None),
    years: Optional[str] = Query(None),
):
    return await _serve(
        ProductType.SWP,
        {"corpus": corpus, "withdrawal": withdrawal, "rate": rate, "years": years},
    )


# ── Tax ──────────────────────────────────────────────────────────────────

@router.get("/tax", response_model=TaxResponse, summary="Income tax on slab rates plus cess")
async def tax(
    income: Optional[str] = Query(None),
    regime: Optional[str] = Query(None, description="new (default) or old"),
):
    return await _serve(ProductType.TAX, {"income": income, "regime": regime})


# ── Portfolio ────────────────────────────────────────────────────────────

@router.post(
    "/mf/portfolio-return",
    response_model=PortfolioReturnResponse,
    summary="Portfolio return from entered holdings",
)
async def portfolio_return(body: PortfolioRequest):
    """Per-holding and portfolio CAGR from invested and current values.

    ``asOfDate`` defaults to today.
    """
    return await _serve(
        ProductType.PORTFOLIO_RETURN,
        {"funds": body.funds, "asOfDate": body.asOfDate or date.today()},
    )
