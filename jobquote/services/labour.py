"""Labour estimation: hours of work for a classified job description.

Each category with specific knowledge gets an ordered rule table; the
first rule whose keyword appears in the description sets the hours.
Categories without a table scale gently with any number in the text.
"""

import math
from dataclasses import dataclass
from typing import Callable, Optional, Union

from jobquote.services.catalog import TradeCategory
from jobquote.services.quantities import extract_quantity, first_number

BASELINE_HOURS = 2.0
GENERIC_MIN_HOURS = 2.0
GENERIC_MAX_HOURS = 8.0
GENERIC_HOURS_PER_UNIT = 0.5

Hours = Union[float, Callable[[int], float]]


@dataclass(frozen=True)
class LabourRule:
    keywords: tuple[str, ...]
    hours: Hours
    quantity_keywords: tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        return any(kw in text for kw in self.keywords)

    def estimate(self, description: str) -> float:
        if not callable(self.hours):
            return float(self.hours)
        return self.hours(job_quantity(description, self.quantity_keywords))


LABOUR_RULES: dict[str, tuple[LabourRule, ...]] = {
    "electrical": (
        LabourRule(("power point", "outlet"), lambda q: max(1.5, q * 0.5),
                   ("power point", "outlet", "powerpoint")),
        LabourRule(("light", "downlight"), lambda q: max(2, q * 0.3),
                   ("light", "downlight", "led")),
        LabourRule(("switchboard",), 4),
        LabourRule(("rewire",), 8),
    ),
    "plumbing": (
        LabourRule(("tap", "mixer"), lambda q: max(1, q * 0.5), ("tap", "mixer")),
        LabourRule(("toilet",), 2),
        LabourRule(("hot water",), 4),
    ),
    "automotive": (
        LabourRule(("dual battery",), 6),
        LabourRule(("light bar",), 3),
        LabourRule(("dash cam",), 2),
        LabourRule(("uhf",), 2.5),
    ),
    "handyman": (
        LabourRule(("shelf", "shelves"), lambda q: max(1, q * 0.5),
                   ("shelf", "shelves")),
        LabourRule(("mount", "hang"), 1.5),
    ),
    "renovation": (
        LabourRule(("bathroom",), 16),
        LabourRule(("kitchen",), 20),
    ),
}


def job_quantity(description: str, keywords: tuple[str, ...] = ()) -> int:
    """Count for labour scaling: keyword-attached, else any number, else 1."""
    qty: Optional[int] = extract_quantity(description, keywords) if keywords else None
    if qty is None:
        qty = first_number(description)
    return qty or 1


def round_half_hour(hours: float) -> float:
    """Nearest 0.5 h, halves rounding up."""
    return math.floor(hours * 2 + 0.5) / 2


def estimate_hours(description: str, trade: TradeCategory) -> float:
    text = description.lower()
    rules = LABOUR_RULES.get(trade.category)

    if rules is None:
        qty = job_quantity(description)
        hours = max(GENERIC_MIN_HOURS, min(qty * GENERIC_HOURS_PER_UNIT, GENERIC_MAX_HOURS))
    else:
        hours = BASELINE_HOURS
        for rule in rules:
            if rule.matches(text):
                hours = rule.estimate(description)
                break

    return round_half_hour(hours)
