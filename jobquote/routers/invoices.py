"""Invoice endpoints: list, edit, mark paid, email to the customer."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from jobquote.models.database import Client, Invoice, User, get_db
from jobquote.models.schemas import InvoiceOut, InvoiceUpdate
from jobquote.auth import get_current_user
from jobquote.services.invoices import get_invoice, list_invoices, mark_invoice_sent, mark_paid
from jobquote.services.notifications import email_configured, send_invoice_email
from jobquote.services.quotes import get_or_create_profile, get_quote

logger = logging.getLogger("jobquote.invoices")

router = APIRouter(prefix="/invoices", tags=["invoices"])


async def _owned_invoice(db: AsyncSession, user: User, invoice_id: int) -> Invoice:
    invoice = await get_invoice(db, user.id, invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


@router.get("", response_model=list[InvoiceOut])
async def get_invoices(
    status: Optional[str] = Query(None, description="unpaid, sent or paid"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return await list_invoices(db, user.id, status=status)


@router.get("/{invoice_id}", response_model=InvoiceOut)
async def get_one(
    invoice_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return await _owned_invoice(db, user, invoice_id)


@router.patch("/{invoice_id}", response_model=InvoiceOut)
async def edit_invoice(
    invoice_id: int,
    data: InvoiceUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    invoice = await _owned_invoice(db, user, invoice_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(invoice, field, value)
    await db.flush()
    return invoice


@router.post("/{invoice_id}/paid", response_model=InvoiceOut)
async def paid(
    invoice_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    invoice = await _owned_invoice(db, user, invoice_id)
    await mark_paid(db, invoice)
    return invoice


@router.post("/{invoice_id}/send", response_model=InvoiceOut)
async def send(
    invoice_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Email the invoice with payment details to the quote's client."""
    invoice = await _owned_invoice(db, user, invoice_id)
    quote = await get_quote(db, user.id, invoice.quote_id)
    client = await db.get(Client, quote.client_id) if quote and quote.client_id else None
    if not client or not client.email:
        raise HTTPException(status_code=400, detail="Client has no email address")
    if not email_configured():
        raise HTTPException(status_code=503, detail="Email delivery is not configured")

    profile = await get_or_create_profile(db, user)
    if not await send_invoice_email(invoice, quote, profile, client):
        raise HTTPException(status_code=502, detail="Failed to send invoice email")

    await mark_invoice_sent(db, invoice)
    logger.info(f"Invoice {invoice.invoice_number} sent to {client.email}")
    return invoice
