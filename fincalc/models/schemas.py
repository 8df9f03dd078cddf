"""Pydantic input / response schemas for every calculator.

Input models validate raw form values (comma-grouped strings are accepted
and normalised). Response models mirror the JSON shapes the calculator
frontend consumes: ``investedAmount``, ``maturityAmount``, ``yearlyPoints``…
"""

from __future__ import annotations

import copy
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from fincalc.services.investment_service import StepType
from fincalc.services.tax_service import TaxRegime
from fincalc.utils.number_format import parse_formatted_number


class ProductType(str, Enum):
    """Closed set of calculators the engine can run."""
    SIP = "sip"
    LUMPSUM = "lumpsum"
    FD = "fd"
    RD = "rd"
    PPF = "ppf"
    EMI = "emi"
    CAGR = "cagr"
    RETIREMENT = "retirement"
    SWP = "swp"
    STEP_UP_SIP = "step-up-sip"
    SIP_PER_DAY = "sip-per-day"
    TAX = "tax"
    PORTFOLIO_RETURN = "portfolio-return"


# Upper bounds keep every formula inside float range and the month loops short.
MAX_YEARS = 100
MAX_AGE = 120
MAX_RATE_PERCENT = 100.0
MAX_AMOUNT = 1e13


# ══════════════════════════════════════════════════════════════════════════
# Inputs
# ══════════════════════════════════════════════════════════════════════════

class CalculatorInputs(BaseModel):
    """Base for all calculator inputs.

    Numeric fields accept ints, floats or display strings such as
    ``"12,34,567"``; anything unparseable becomes NaN and fails validation.
    """

    model_config = ConfigDict(allow_inf_nan=False, frozen=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _normalise_numerals(cls, value: Any, info: ValidationInfo) -> Any:
        annotation = cls.model_fields[info.field_name].annotation
        if isinstance(value, str) and annotation in (int, float):
            return parse_formatted_number(value)
        return value


class SipInputs(CalculatorInputs):
    monthly: float = Field(..., gt=0, le=MAX_AMOUNT, description="Monthly instalment in INR")
    rate: float = Field(..., ge=0, le=MAX_RATE_PERCENT, description="Expected annual return in %")
    years: int = Field(..., gt=0, le=MAX_YEARS, description="Investment period in years")


class RdInputs(SipInputs):
    pass


class LumpsumInputs(CalculatorInputs):
    amount: float = Field(..., gt=0, le=MAX_AMOUNT, description="One-time amount in INR")
    rate: float = Field(..., ge=0, le=MAX_RATE_PERCENT, description="Annual rate in %")
    years: int = Field(..., gt=0, le=MAX_YEARS, description="Period in years")


class FdInputs(LumpsumInputs):
    pass


class EmiInputs(LumpsumInputs):
    pass


class PpfInputs(CalculatorInputs):
    yearly: float = Field(..., gt=0, le=MAX_AMOUNT, description="Yearly contribution in INR")
    rate: float = Field(..., ge=0, le=MAX_RATE_PERCENT, description="Annual PPF rate in %")
    years: int = Field(..., gt=0, le=MAX_YEARS, description="Tenure in years")


class CagrInputs(CalculatorInputs):
    initial: float = Field(..., gt=0, le=MAX_AMOUNT, description="Initial value in INR")
    final: float = Field(..., gt=0, le=MAX_AMOUNT, description="Final value in INR")
    years: float = Field(..., gt=0, le=MAX_YEARS, description="Holding period in years (may be fractional)")


class RetirementInputs(CalculatorInputs):
    currentAge: int = Field(..., gt=0, le=MAX_AGE)
    retirementAge: int = Field(..., gt=0, le=MAX_AGE)
    monthlyInvestment: float = Field(..., gt=0, le=MAX_AMOUNT, description="Monthly SIP in INR")
    currentCorpus: float = Field(0.0, ge=0, le=MAX_AMOUNT, description="Existing savings in INR")
    expectedReturn: float = Field(..., ge=0, le=MAX_RATE_PERCENT, description="Expected annual return in %")
    inflation: float = Field(0.0, ge=0, le=MAX_RATE_PERCENT, description="Annual inflation in %")

    @model_validator(mode="after")
    def _retire_after_today(self) -> "RetirementInputs":
        if self.retirementAge <= self.currentAge:
            raise ValueError("retirementAge must be greater than currentAge")
        return self


class SwpInputs(CalculatorInputs):
    corpus: float = Field(..., gt=0, le=MAX_AMOUNT, description="Initial corpus in INR")
    withdrawal: float = Field(..., gt=0, le=MAX_AMOUNT, description="Monthly withdrawal in INR")
    rate: float = Field(..., ge=0, le=MAX_RATE_PERCENT, description="Annual return on the corpus in %")
    years: int = Field(..., gt=0, le=MAX_YEARS)


class StepUpSipInputs(CalculatorInputs):
    monthly: float = Field(..., gt=0, le=MAX_AMOUNT, description="Starting monthly SIP in INR")
    rate: float = Field(..., ge=0, le=MAX_RATE_PERCENT)
    years: int = Field(..., gt=0, le=MAX_YEARS)
    stepType: StepType = StepType.PERCENT
    stepValue: float = Field(0.0, ge=0, le=MAX_AMOUNT, description="Yearly step-up (percent or INR)")

    @field_validator("stepType", mode="before")
    @classmethod
    def _upper_step_type(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _percent_step_in_range(self) -> "StepUpSipInputs":
        if self.stepType is StepType.PERCENT and self.stepValue > MAX_RATE_PERCENT:
            raise ValueError(f"stepValue must be at most {MAX_RATE_PERCENT:g} for a PERCENT step-up")
        return self


class SipPerDayInputs(CalculatorInputs):
    goal: float = Field(..., gt=0, le=MAX_AMOUNT, description="Target corpus in INR")
    rate: float = Field(..., ge=0, le=MAX_RATE_PERCENT)
    years: int = Field(..., gt=0, le=MAX_YEARS)


class TaxInputs(CalculatorInputs):
    income: float = Field(..., gt=0, le=MAX_AMOUNT, description="Annual taxable income in INR")
    regime: TaxRegime = TaxRegime.NEW

    @field_validator("regime", mode="before")
    @classmethod
    def _lower_regime(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


class PortfolioHolding(CalculatorInputs):
    schemeName: str = ""
    amcName: str = ""
    category: str = ""
    investmentDate: date
    investedAmount: float = Field(..., gt=0, le=MAX_AMOUNT)
    currentValue: float = Field(..., gt=0, le=MAX_AMOUNT)


class PortfolioInputs(CalculatorInputs):
    funds: List[PortfolioHolding] = Field(..., min_length=1)
    asOfDate: date


class PortfolioRequest(BaseModel):
    """POST body for the portfolio-return endpoint; asOfDate defaults to today."""
    funds: List[Dict[str, Any]]
    asOfDate: Optional[date] = None


# ══════════════════════════════════════════════════════════════════════════
# Result envelope
# ══════════════════════════════════════════════════════════════════════════

class CalculationResult(BaseModel):
    """Aggregate summary plus the ordered series for one calculation.

    The summary and series are deep-copied on the way in and on the way out
    of ``to_payload``, so neither the caller's dicts nor a returned payload
    can reach the stored result.
    """

    model_config = ConfigDict(frozen=True)

    product: ProductType
    summary: Dict[str, Any]
    yearlyPoints: Optional[List[Dict[str, Any]]] = None

    @field_validator("summary", "yearlyPoints", mode="after")
    @classmethod
    def _detach(cls, value: Any) -> Any:
        return copy.deepcopy(value)

    def to_payload(self) -> Dict[str, Any]:
        """Flatten into the wire shape: summary fields + ``yearlyPoints``."""
        payload = copy.deepcopy(self.summary)
        if self.yearlyPoints is not None:
            payload["yearlyPoints"] = copy.deepcopy(self.yearlyPoints)
        return payload


# ══════════════════════════════════════════════════════════════════════════
# Responses
# ══════════════════════════════════════════════════════════════════════════

class GrowthPoint(BaseModel):
    year: int
    invested: float
    total: float


class SipResponse(BaseModel):
    investedAmount: int
    maturityAmount: int
    profit: int = Field(..., description="maturityAmount − investedAmount")
    yearlyPoints: List[GrowthPoint]


class LumpsumResponse(SipResponse):
    pass


class FdResponse(BaseModel):
    investedAmount: int
    maturityAmount: int
    interestEarned: int
    yearlyPoints: List[GrowthPoint]


class RdResponse(FdResponse):
    monthlyInstallment: int
    annualRatePercent: float
    years: int


class PpfResponse(FdResponse):
    calculator: str
    currency: str
    yearlyContribution: int
    annualRatePercent: float
    years: int


class EmiPoint(BaseModel):
    year: int
    principalPaid: float = Field(..., description="Cumulative principal repaid")
    interestPaid: float = Field(..., description="Cumulative interest paid")
    balanceOutstanding: float


class EmiResponse(BaseModel):
    loanAmount: int
    annualRatePercent: float
    years: int
    emiPerMonth: int
    totalPayment: int
    totalInterest: int
    yearlyPoints: List[EmiPoint]


class CagrPoint(BaseModel):
    year: Union[int, float]
    value: float


class CagrResponse(BaseModel):
    initialAmount: int
    finalAmount: int
    years: float
    cagrPercent: float
    totalReturnPercent: float
    totalGain: int
    yearlyPoints: List[CagrPoint]


class RetirementPoint(BaseModel):
    age: int
    invested: float
    corpus: float
    corpusReal: float = Field(..., description="Corpus in today's rupees")


class RetirementResponse(BaseModel):
    currentAge: int
    retirementAge: int
    yearsToInvest: int
    monthlyInvestment: int
    currentCorpus: int
    expectedReturnPercent: float
    inflationPercent: float
    totalInvestment: int
    totalGain: int
    estimatedCorpusAtRetirement: int
    corpusInTodayValue: int
    yearlyPoints: List[RetirementPoint]


class SwpPoint(BaseModel):
    year: int
    balance: float
    totalWithdrawn: float


class SwpResponse(BaseModel):
    initialCorpus: int
    monthlyWithdrawal: int
    annualRatePercent: float
    years: int
    totalWithdrawn: int
    endingCorpus: int
    totalGrowth: int
    depletionMonth: Optional[int] = Field(None, description="Month the corpus ran out, if it did")
    yearlyPoints: List[SwpPoint]


class StepUpSipPoint(BaseModel):
    year: int
    monthlySip: float
    investedAmount: float
    corpusValue: float


class StepUpSipResponse(BaseModel):
    calculator: str
    currency: str
    startMonthlySip: int
    annualRatePercent: float
    years: int
    stepType: str
    stepPercent: float
    stepAmount: float
    totalInvestedAmount: int
    maturityAmount: int
    totalGain: int
    inputSummary: str
    explanation: str
    yearlyPoints: List[StepUpSipPoint]


class SipPerDayPoint(BaseModel):
    year: int
    investedAmount: float
    corpusValue: float


class SipPerDayResponse(BaseModel):
    calculator: str
    currency: str
    targetCorpus: int
    annualRatePercent: float
    years: int
    requiredMonthlySip: int
    requiredDailySaving: int
    totalInvestedAmount: int
    expectedMaturityAmount: int
    inputSummary: str
    explanation: str
    yearlyPoints: List[SipPerDayPoint]


class TaxSlab(BaseModel):
    lower: float
    upper: Optional[float] = None
    ratePercent: float
    taxableAmount: float
    tax: float


class TaxResponse(BaseModel):
    income: int
    regime: str
    taxBeforeCess: int
    cess: int
    tax: int = Field(..., description="Slab tax plus cess")
    netIncome: int
    effectiveRate: float = Field(..., description="tax / income in %")
    slabs: List[TaxSlab]


class PortfolioFundResult(BaseModel):
    schemeName: str
    amcName: str
    category: str
    investmentDate: str
    investedAmount: int
    currentValue: int
    profit: int
    cagrPercent: float
    weightPercent: float
    holdingYears: float


class PortfolioAllocationPoint(BaseModel):
    schemeName: str
    weightPercent: float


class PortfolioReturnResponse(BaseModel):
    calculator: str
    currency: str
    asOfDate: str
    totalInvested: int
    totalCurrentValue: int
    totalProfit: int
    portfolioCagrPercent: float
    funds: List[PortfolioFundResult]
    allocationChart: List[PortfolioAllocationPoint]


# ── Formatting helpers (/format/*) ───────────────────────────────────────

class IndianFormatResponse(BaseModel):
    input: str
    formatted: str
    value: Optional[float] = Field(None, description="Parsed value, null when not numeric")


class WordsResponse(BaseModel):
    amount: int
    words: str = Field(..., description="Lowercase Indian-scale words")
    caption: str = Field(..., description="Title-cased caption with currency suffix")


# ── Performance Report (/performance) ────────────────────────────────────

class PerformanceResponse(BaseModel):
    time: str = Field(..., description="Last response time (HH:mm:ss.SSS)")
    memory: str = Field(..., description="Current memory usage (e.g. '123.45 MB')")
    threads: int = Field(..., description="Number of active threads")
