"""Quote totals: subtotal, GST and grand total."""

from typing import Iterable, Union

from jobquote.models.quote import QuoteLineItem, QuoteTotals

GST_RATE = 0.10


def compute_totals(
    items: Iterable[QuoteLineItem],
    tax_enabled: bool,
    tax_rate: float = GST_RATE,
) -> QuoteTotals:
    """Sum qty × cost over all items and apply GST when enabled.

    Nothing is rounded here; round only when displaying.
    """
    subtotal = sum((item.qty * item.cost for item in items), 0.0)
    tax_amount = subtotal * tax_rate if tax_enabled else 0.0
    return QuoteTotals(subtotal=subtotal, tax_amount=tax_amount, total=subtotal + tax_amount)


def format_currency(value: Union[int, float, None]) -> str:
    if not value:
        return "$0.00"
    return f"${value:,.2f}"
