"""Value types produced by the quote estimation engine.

These are transient: a fresh QuoteResult is built for every estimate and
never mutated. Persisting one is the job of services.quotes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from jobquote.services.catalog import TradeCategory


class LineItemType(str, Enum):
    LABOUR = "labour"
    MATERIALS = "materials"
    OTHER = "other"


class UnitKind(str, Enum):
    HOURS = "hours"
    EACH = "each"
    FIXED = "fixed"


# Unit implied by each item type when none is given
DEFAULT_UNITS = {
    LineItemType.LABOUR: UnitKind.HOURS,
    LineItemType.MATERIALS: UnitKind.EACH,
    LineItemType.OTHER: UnitKind.FIXED,
}


@dataclass(frozen=True)
class QuoteLineItem:
    """One priced row of a quote."""
    name: str
    type: LineItemType
    qty: float
    cost: float
    unit: Optional[UnitKind] = None

    def __post_init__(self):
        if self.unit is None:
            object.__setattr__(self, "unit", DEFAULT_UNITS[self.type])

    @property
    def line_total(self) -> float:
        return self.qty * self.cost

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type.value,
            "qty": self.qty,
            "cost": self.cost,
            "unit": self.unit.value,
        }


def labour(name: str, hours: float, rate: float) -> QuoteLineItem:
    return QuoteLineItem(name, LineItemType.LABOUR, hours, rate)


def materials(name: str, cost: float, qty: float = 1) -> QuoteLineItem:
    return QuoteLineItem(name, LineItemType.MATERIALS, qty, cost)


def fee(name: str, cost: float) -> QuoteLineItem:
    return QuoteLineItem(name, LineItemType.OTHER, 1, cost)


@dataclass(frozen=True)
class QuoteTotals:
    subtotal: float
    tax_amount: float
    total: float


@dataclass(frozen=True)
class QuoteResult:
    """The engine's single output value."""
    job_title: str
    summary: str
    items: tuple[QuoteLineItem, ...]
    subtotal: float
    tax_amount: float
    total: float
    category: Optional["TradeCategory"] = field(default=None, compare=False)

    def to_response(self) -> dict:
        """Wire shape of the hosted estimation endpoint."""
        return {
            "job_title": self.job_title,
            "summary": self.summary,
            "items": [item.to_dict() for item in self.items],
            "subtotal": self.subtotal,
            "gst": self.tax_amount,
            "total": self.total,
        }
