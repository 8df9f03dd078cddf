"""Routers for display helpers:
    GET  /api/format/indian   value  → Indian digit grouping
    GET  /api/format/words    amount → amount in words
"""

from __future__ import annotations

import logging
import math

from fastapi import APIRouter, Query

from fincalc.config import settings
from fincalc.models.schemas import IndianFormatResponse, WordsResponse
from fincalc.utils.helpers import round_rupee
from fincalc.utils.number_format import format_indian_groups, parse_formatted_number
from fincalc.utils.number_words import amount_in_words, to_indian_words

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=f"{settings.API_PREFIX}/format",
    tags=["Formatting"],
)


@router.get("/indian", response_model=IndianFormatResponse, summary="Indian digit grouping")
async def format_indian(value: str = Query("", description="Raw or partially typed numeral")):
    parsed = parse_formatted_number(value)
    return IndianFormatResponse(
        input=value,
        formatted=format_indian_groups(value),
        value=None if math.isnan(parsed) else parsed,
    )


@router.get("/words", response_model=WordsResponse, summary="Amount in Indian-scale words")
async def format_words(
    amount: str = Query(..., description="Non-negative amount (₹, commas allowed)"),
    suffix: str = Query("Rupees", description="Caption suffix; empty for none"),
):
    """Negative or non-numeric amounts are rejected with 422."""
    parsed = parse_formatted_number(amount)
    words = to_indian_words(parsed)
    return WordsResponse(
        amount=round_rupee(parsed),
        words=words,
        caption=amount_in_words(parsed, suffix=suffix),
    )
