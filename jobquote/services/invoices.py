"""Invoices: convert accepted quotes and track payment status."""

import logging
import time
from datetime import date, timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobquote.models.database import Invoice, Quote

logger = logging.getLogger("jobquote.invoices")


def new_invoice_number() -> str:
    """INV- plus the last six digits of the current epoch milliseconds."""
    return f"INV-{str(int(time.time() * 1000))[-6:]}"


async def create_invoice(
    session: AsyncSession,
    quote: Quote,
    due_days: int = 7,
    downpayment_amount: Optional[float] = None,
) -> Invoice:
    """Invoice the full quote total, or only the requested downpayment."""
    invoice = Invoice(
        quote_id=quote.id,
        invoice_number=new_invoice_number(),
        total=downpayment_amount if downpayment_amount else quote.total,
        due_date=date.today() + timedelta(days=due_days),
        status="unpaid",
    )
    session.add(invoice)
    await session.flush()
    logger.info(f"Invoice {invoice.invoice_number} created from quote {quote.id}")
    return invoice


async def get_invoice(session: AsyncSession, user_id: int, invoice_id: int) -> Optional[Invoice]:
    result = await session.execute(
        select(Invoice)
        .join(Quote, Invoice.quote_id == Quote.id)
        .where(Invoice.id == invoice_id, Quote.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def list_invoices(session: AsyncSession, user_id: int, status: Optional[str] = None) -> list[Invoice]:
    query = (
        select(Invoice)
        .join(Quote, Invoice.quote_id == Quote.id)
        .where(Quote.user_id == user_id)
    )
    if status:
        query = query.where(Invoice.status == status.lower())
    result = await session.execute(query.order_by(Invoice.created_at.desc(), Invoice.id.desc()))
    return list(result.scalars().all())


async def mark_paid(session: AsyncSession, invoice: Invoice):
    invoice.status = "paid"
    await session.flush()


async def mark_invoice_sent(session: AsyncSession, invoice: Invoice):
    # Paid invoices keep their status when re-sent
    if invoice.status != "paid":
        invoice.status = "sent"
        await session.flush()
