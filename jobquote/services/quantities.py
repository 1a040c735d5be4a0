"""Quantity extraction: pull counts like "6 downlights" out of job text."""

import re
from typing import Iterable, Optional

MIN_QUANTITY = 1
MAX_QUANTITY = 20  # rejects nonsense like "9999 power points"


def _clamp(qty: int) -> int:
    return max(MIN_QUANTITY, min(qty, MAX_QUANTITY))


def _to_quantity(digits: str) -> int:
    # three significant digits is already past the cap
    if len(digits.lstrip("0")) > 2:
        return MAX_QUANTITY
    return _clamp(int(digits[-3:]))


def _patterns(keyword: str) -> list[re.Pattern]:
    kw = re.escape(keyword)
    flexible = r"\s*".join(re.escape(part) for part in keyword.split())
    return [
        re.compile(rf"(\d+)\s*{kw}", re.IGNORECASE),
        re.compile(rf"(\d+)\s*x\s*{kw}", re.IGNORECASE),
        re.compile(rf"(\d+)\s*{flexible}", re.IGNORECASE),
        # one qualifier between count and item: "4 double power points"
        re.compile(rf"(\d+)\s+[a-z]+\s+{flexible}", re.IGNORECASE),
    ]


def extract_quantity(description: str, keywords: Iterable[str]) -> Optional[int]:
    """Count attached to the first keyword that has one, in keyword order.

    Falls back to a bare number at the very start of the text. Results are
    clamped to [1, 20]; None when nothing matches.
    """
    for keyword in keywords:
        for pattern in _patterns(keyword):
            match = pattern.search(description)
            if match:
                return _to_quantity(match.group(1))

    leading = re.match(r"(\d+)", description)
    if leading:
        return _to_quantity(leading.group(1))
    return None


def first_number(description: str) -> Optional[int]:
    """First integer anywhere in the text, clamped to [1, 20]."""
    match = re.search(r"(\d+)", description)
    return _to_quantity(match.group(1)) if match else None
