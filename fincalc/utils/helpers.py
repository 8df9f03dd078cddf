"""Shared utility functions — rounding, input guards, period arithmetic."""

from __future__ import annotations

import math
from typing import List

from fincalc.errors import InvalidInputError

MONTHS_PER_YEAR = 12


# ── Rounding ──────────────────────────────────────────────────────────────

def round_currency(value: float, decimals: int = 2) -> float:
    """Round to *decimals* places with Python's ``round`` (halves to even).

    Used for percentages and rates. Rupee aggregates go through
    :func:`round_rupee`, which rounds halves away from zero instead.
    """
    return round(value, decimals)


def round_rupee(value: float) -> int:
    """Round to the nearest whole rupee, halves away from zero."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


# ── Input guards ──────────────────────────────────────────────────────────

def require_positive(name: str, value: float) -> float:
    """Return *value* as float, raising if it is not a finite number > 0."""
    value = _require_finite(name, value)
    if value <= 0:
        raise InvalidInputError(f"{name} must be greater than 0, got {value:g}")
    return value


def require_non_negative(name: str, value: float) -> float:
    """Return *value* as float, raising if it is not a finite number >= 0."""
    value = _require_finite(name, value)
    if value < 0:
        raise InvalidInputError(f"{name} must not be negative, got {value:g}")
    return value


def require_whole_years(name: str, value: float) -> int:
    """Durations are whole, non-negative years (0 is the degenerate case)."""
    value = require_non_negative(name, value)
    if not float(value).is_integer():
        raise InvalidInputError(f"{name} must be a whole number of years, got {value:g}")
    return int(value)


def _require_finite(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"{name} must be a number")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be a finite number")
    return value


# ── Periods & series ──────────────────────────────────────────────────────

def years_in_months(years: int) -> int:
    return years * MONTHS_PER_YEAR


def monthly_rate(annual_rate_percent: float) -> float:
    """Annual percentage → monthly decimal rate (``rate / 12 / 100``)."""
    return annual_rate_percent / MONTHS_PER_YEAR / 100


def empty_series(*value_keys: str, period_key: str = "year", start: int = 0) -> List[dict]:
    """Single-point series used when the duration resolves to zero periods.

    Every key in *value_keys* is set to 0.0 on the lone point.
    """
    point: dict = {period_key: start}
    for key in value_keys:
        point[key] = 0.0
    return [point]
