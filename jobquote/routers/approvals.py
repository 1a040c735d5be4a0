"""Customer approval endpoints. The approval token is the only credential."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from jobquote.models.database import Quote, get_db
from jobquote.models.schemas import ApprovalDecision, ApprovalView, QuoteItemOut
from jobquote.services.quotes import get_quote_by_token, record_decision

router = APIRouter(prefix="/approvals", tags=["approvals"])


async def _quote_for_token(db: AsyncSession, token: str) -> Quote:
    quote = await get_quote_by_token(db, token)
    if not quote:
        raise HTTPException(status_code=404, detail="Quote not found")
    return quote


def _view(quote: Quote) -> ApprovalView:
    profile = quote.user.business_profile if quote.user else None
    return ApprovalView(
        business_name=(profile.business_name if profile else "") or "Professional Services",
        job_title=quote.job_title,
        description=quote.description or "",
        status=quote.status,
        subtotal=quote.subtotal,
        gst_amount=quote.gst_amount,
        total=quote.total,
        items=[QuoteItemOut.model_validate(item) for item in quote.items],
    )


@router.get("/{token}", response_model=ApprovalView)
async def view_quote(token: str, db: AsyncSession = Depends(get_db)):
    return _view(await _quote_for_token(db, token))


@router.post("/{token}", response_model=ApprovalView)
async def decide(token: str, data: ApprovalDecision, db: AsyncSession = Depends(get_db)):
    """Approve or decline a quote. A quote can only be decided once."""
    quote = await _quote_for_token(db, token)
    if not await record_decision(db, quote, data.approved):
        raise HTTPException(status_code=409, detail=f"Quote already {quote.status}")
    return _view(quote)
