"""Quote endpoints: fast quote generation, editing, sending, invoicing."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobquote.config import get_settings
from jobquote.models.database import Client, Quote, User, get_db
from jobquote.models.schemas import (
    FastQuoteRequest, InvoiceCreate, InvoiceOut, MessageResponse,
    QuoteListResponse, QuoteOut, QuoteUpdate,
)
from jobquote.auth import get_current_user
from jobquote.services.catalog import DEFAULT_CATALOG
from jobquote.services.estimator import estimate_quote
from jobquote.services.invoices import create_invoice
from jobquote.services.notifications import email_configured, send_quote_email
from jobquote.services.quotes import (
    create_quote, delete_quote, get_or_create_profile, get_quote, list_quotes,
    mark_sent, update_quote,
)

logger = logging.getLogger("jobquote.quotes")

router = APIRouter(prefix="/quotes", tags=["quotes"])


async def _owned_quote(db: AsyncSession, user: User, quote_id: int) -> Quote:
    quote = await get_quote(db, user.id, quote_id)
    if not quote:
        raise HTTPException(status_code=404, detail="Quote not found")
    return quote


@router.post("/fast", response_model=QuoteOut, status_code=201)
async def fast_quote(
    data: FastQuoteRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Generate a draft quote from a job description using the profile's rate."""
    result = await db.execute(
        select(Client).where(Client.id == data.client_id, Client.user_id == user.id)
    )
    client = result.scalar_one_or_none()
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")

    settings = get_settings()
    profile = await get_or_create_profile(db, user)
    estimate = estimate_quote(
        data.job_description,
        hourly_rate=profile.hourly_rate,
        gst_enabled=profile.gst_enabled,
        catalog=getattr(request.app.state, "catalog", DEFAULT_CATALOG),
        default_rate=settings.default_hourly_rate,
        tax_rate=settings.gst_rate,
    )
    return await create_quote(db, user.id, client.id, estimate)


@router.get("", response_model=QuoteListResponse)
async def get_quotes(
    status: Optional[str] = Query(None, description="draft, sent, approved or rejected"),
    client_id: Optional[int] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List quotes, newest first."""
    quotes = await list_quotes(db, user.id, status=status, client_id=client_id)
    return QuoteListResponse(
        total=len(quotes),
        quotes=[QuoteOut.model_validate(q) for q in quotes[offset: offset + limit]],
    )


@router.get("/{quote_id}", response_model=QuoteOut)
async def get_one(
    quote_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return await _owned_quote(db, user, quote_id)


@router.patch("/{quote_id}", response_model=QuoteOut)
async def edit_quote(
    quote_id: int,
    data: QuoteUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Edit title, summary or the full item list. Items re-total the quote."""
    quote = await _owned_quote(db, user, quote_id)
    profile = await get_or_create_profile(db, user)
    return await update_quote(db, quote, data, profile.gst_enabled, get_settings().gst_rate)


@router.delete("/{quote_id}", response_model=MessageResponse)
async def remove_quote(
    quote_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    quote = await _owned_quote(db, user, quote_id)
    await delete_quote(db, quote)
    return MessageResponse(message="Quote deleted")


@router.post("/{quote_id}/send", response_model=QuoteOut)
async def send_quote(
    quote_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Email the quote with its approval link, then mark a draft as sent."""
    quote = await _owned_quote(db, user, quote_id)
    client = await db.get(Client, quote.client_id) if quote.client_id else None
    if not client or not client.email:
        raise HTTPException(status_code=400, detail="Client has no email address")
    if not email_configured():
        raise HTTPException(status_code=503, detail="Email delivery is not configured")

    profile = await get_or_create_profile(db, user)
    if not await send_quote_email(quote, profile, client):
        raise HTTPException(status_code=502, detail="Failed to send quote email")

    await mark_sent(db, quote)
    logger.info(f"Quote {quote.id} sent to {client.email}")
    return quote


@router.post("/{quote_id}/invoice", response_model=InvoiceOut, status_code=201)
async def invoice_quote(
    quote_id: int,
    data: Optional[InvoiceCreate] = None,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Convert a quote to an invoice for the full total or a downpayment."""
    quote = await _owned_quote(db, user, quote_id)
    downpayment = data.downpayment_amount if data else None
    if downpayment is not None and downpayment > quote.total:
        raise HTTPException(status_code=400, detail="Downpayment exceeds the quote total")

    return await create_invoice(
        db, quote,
        due_days=get_settings().invoice_due_days,
        downpayment_amount=downpayment,
    )
