"""Quote persistence: save engine output, apply edits, record decisions."""

import logging
from typing import Iterable, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jobquote.models.database import BusinessProfile, Invoice, Quote, QuoteItem, User
from jobquote.models.quote import DEFAULT_UNITS, LineItemType, QuoteLineItem, QuoteResult, UnitKind
from jobquote.models.schemas import QuoteItemIn, QuoteUpdate
from jobquote.services.totals import compute_totals

logger = logging.getLogger("jobquote.quotes")

DECIDED_STATUSES = ("approved", "rejected")


async def get_or_create_profile(session: AsyncSession, user: User) -> BusinessProfile:
    result = await session.execute(
        select(BusinessProfile).where(BusinessProfile.user_id == user.id)
    )
    profile = result.scalar_one_or_none()
    if profile is None:
        profile = BusinessProfile(user_id=user.id)
        session.add(profile)
        await session.flush()
    return profile


def _rows(items: Iterable[QuoteLineItem]) -> list[QuoteItem]:
    return [
        QuoteItem(
            position=position,
            type=item.type.value,
            name=item.name,
            quantity=item.qty,
            unit=item.unit.value,
            unit_price=item.cost,
            total=item.line_total,
        )
        for position, item in enumerate(items)
    ]


def line_items_from_input(items: Iterable[QuoteItemIn]) -> list[QuoteLineItem]:
    """Edited rows from the quote screen, as engine line items."""
    line_items = []
    for item in items:
        item_type = LineItemType(item.type)
        unit = UnitKind(item.unit) if item.unit else DEFAULT_UNITS[item_type]
        line_items.append(QuoteLineItem(item.name, item_type, item.quantity, item.unit_price, unit))
    return line_items


async def create_quote(
    session: AsyncSession,
    user_id: int,
    client_id: Optional[int],
    result: QuoteResult,
) -> Quote:
    """Store one quote row and one row per line item, in generation order."""
    quote = Quote(
        user_id=user_id,
        client_id=client_id,
        job_title=result.job_title,
        description=result.summary,
        status="draft",
        subtotal=result.subtotal,
        gst_amount=result.tax_amount,
        total=result.total,
        items=_rows(result.items),
    )
    session.add(quote)
    await session.flush()
    logger.info(f"Quote {quote.id} created: {quote.job_title} ({len(result.items)} items, total {quote.total:.2f})")
    return quote


async def get_quote(session: AsyncSession, user_id: int, quote_id: int) -> Optional[Quote]:
    result = await session.execute(
        select(Quote)
        .options(selectinload(Quote.items))
        .where(Quote.id == quote_id, Quote.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def get_quote_by_token(session: AsyncSession, token: str) -> Optional[Quote]:
    result = await session.execute(
        select(Quote)
        .options(selectinload(Quote.items), selectinload(Quote.user).selectinload(User.business_profile))
        .where(Quote.approval_token == token)
    )
    return result.scalar_one_or_none()


async def list_quotes(
    session: AsyncSession,
    user_id: int,
    status: Optional[str] = None,
    client_id: Optional[int] = None,
) -> list[Quote]:
    query = select(Quote).options(selectinload(Quote.items)).where(Quote.user_id == user_id)
    if status:
        query = query.where(Quote.status == status.lower())
    if client_id is not None:
        query = query.where(Quote.client_id == client_id)
    result = await session.execute(query.order_by(Quote.created_at.desc(), Quote.id.desc()))
    return list(result.scalars().all())


async def update_quote(
    session: AsyncSession,
    quote: Quote,
    data: QuoteUpdate,
    gst_enabled: bool,
    tax_rate: float,
) -> Quote:
    """Apply manual edits; a new item list replaces the old one and re-totals."""
    if data.job_title is not None:
        quote.job_title = data.job_title
    if data.description is not None:
        quote.description = data.description

    if data.items is not None:
        line_items = line_items_from_input(data.items)
        totals = compute_totals(line_items, gst_enabled, tax_rate)
        quote.items = _rows(line_items)
        quote.subtotal = totals.subtotal
        quote.gst_amount = totals.tax_amount
        quote.total = totals.total

    await session.flush()
    return quote


async def delete_quote(session: AsyncSession, quote: Quote):
    await session.execute(delete(Invoice).where(Invoice.quote_id == quote.id))
    await session.delete(quote)
    await session.flush()


async def mark_sent(session: AsyncSession, quote: Quote):
    """Only the first send of a draft changes its status."""
    if quote.status == "draft":
        quote.status = "sent"
        await session.flush()


async def record_decision(session: AsyncSession, quote: Quote, approved: bool) -> bool:
    """Set approved/rejected once. Returns False if already decided."""
    if quote.status in DECIDED_STATUSES:
        return False
    quote.status = "approved" if approved else "rejected"
    await session.flush()
    logger.info(f"Quote {quote.id} {quote.status} by customer")
    return True
