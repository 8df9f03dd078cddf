"""Number → English words on the Indian scale (crore / lakh / thousand).

    >>> to_indian_words(12345678)
    'one crore twenty three lakh forty five thousand six hundred seventy eight'
    >>> amount_in_words(1050000)
    'Ten Lakh Fifty Thousand Rupees'
"""

from __future__ import annotations

import math
from typing import Union

from fincalc.errors import InvalidArgumentError

__all__ = ["to_indian_words", "to_title_case", "amount_in_words"]

_UNITS = [
    "", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine",
    "ten", "eleven", "twelve", "thirteen", "fourteen", "fifteen", "sixteen",
    "seventeen", "eighteen", "nineteen",
]

_TENS = [
    "", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety",
]

# Descending; the last tier carries no label.
_SCALES = [
    (10_000_000, "crore"),
    (100_000, "lakh"),
    (1_000, "thousand"),
    (1, ""),
]


def _two_digits(n: int) -> str:
    if n < 20:
        return _UNITS[n]
    return _TENS[n // 10] + (" " + _UNITS[n % 10] if n % 10 else "")


def _three_digits(n: int) -> str:
    if n == 0:
        return ""
    if n < 100:
        return _two_digits(n)
    return _UNITS[n // 100] + " hundred" + (" " + _two_digits(n % 100) if n % 100 else "")


def _coerce(n: Union[int, float]) -> int:
    if isinstance(n, bool) or not isinstance(n, (int, float)):
        raise InvalidArgumentError(f"Expected a number, got {type(n).__name__}")
    if isinstance(n, float):
        if not math.isfinite(n):
            raise InvalidArgumentError(f"Cannot convert {n} to words")
        n = int(math.floor(n + 0.5)) if n >= 0 else int(round(n))
    if n < 0:
        raise InvalidArgumentError(f"Cannot convert negative number {n} to words")
    return n


def to_indian_words(n: Union[int, float]) -> str:
    """Convert a non-negative integer into lowercase Indian-scale words.

    ``0`` yields ``""`` (nothing to show). Floats are rounded to the nearest
    integer first. A crore chunk of 1000 or more is itself spelled on the
    Indian scale, so ``10**12`` reads "one lakh crore".
    """
    n = _coerce(n)

    words = ""
    for unit, label in _SCALES:
        if n < unit:
            continue
        chunk, n = divmod(n, unit)
        if unit == _SCALES[0][0] and chunk >= 1000:
            chunk_words = to_indian_words(chunk)
        else:
            chunk_words = _three_digits(chunk)
        words += chunk_words + (" " + label if label else "") + " "
    return words.strip()


def to_title_case(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def amount_in_words(amount: Union[int, float], suffix: str = "Rupees") -> str:
    """Caption for a rupee amount, e.g. ``'Ten Lakh Fifty Thousand Rupees'``."""
    words = to_indian_words(amount)
    if not words:
        return ""
    return to_title_case(words) + (f" {suffix}" if suffix else "")
