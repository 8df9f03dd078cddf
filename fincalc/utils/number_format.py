"""Indian number formatting utilities.

Indian digit grouping keeps the last three digits together and groups the
remaining digits in pairs from the right::

    12345678  →  1,23,45,678

Both helpers work on the strings a form field produces while the user is
still typing, so neither raises on partial or junk input.
"""

from __future__ import annotations

import math
import re
from typing import Union

__all__ = ["format_indian_groups", "parse_formatted_number", "format_inr"]

# Digits with at most one decimal point; "1234." is a valid partial entry.
_NUMERAL_RE = re.compile(r"^(\d*)(\.\d*)?$")


def _group_integer_part(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_indian_groups(raw: str) -> str:
    """Re-render *raw* with Indian thousands separators.

    Existing separators are stripped first. An empty string stays empty and
    anything that is not a non-negative numeral is returned unchanged so the
    caller can flag it as invalid.
    """
    if not raw:
        return ""
    cleaned = raw.replace(",", "").strip()
    if cleaned == "":
        return ""

    match = _NUMERAL_RE.match(cleaned)
    if match is None or cleaned == ".":
        return raw

    integer_part, fraction = match.group(1), match.group(2) or ""
    integer_part = integer_part.lstrip("0") or ("0" if integer_part else "")
    return _group_integer_part(integer_part) + fraction


def parse_formatted_number(display: Union[str, int, float, None]) -> float:
    """Strip grouping separators and parse to float.

    Returns ``math.nan`` for empty, non-numeric or non-finite input.
    """
    if display is None or isinstance(display, bool):
        return math.nan
    if isinstance(display, (int, float)):
        return float(display) if math.isfinite(display) else math.nan

    cleaned = str(display).replace(",", "").strip()
    if not cleaned:
        return math.nan
    try:
        value = float(cleaned)
    except ValueError:
        return math.nan
    return value if math.isfinite(value) else math.nan


def format_inr(value: float, decimals: int = 0, symbol: bool = True) -> str:
    """Format *value* as rupees with Indian grouping, e.g. ``₹12,34,567``."""
    sign = "-" if value < 0 else ""
    text = f"{abs(value):.{decimals}f}"
    integer_part, _, fraction = text.partition(".")
    body = _group_integer_part(integer_part) + (f".{fraction}" if fraction else "")
    return f"{sign}{'₹' if symbol else ''}{body}"
