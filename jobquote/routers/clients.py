"""Client endpoints: the customers a tradesperson quotes for."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from jobquote.models.database import Client, Quote, User, get_db
from jobquote.models.schemas import ClientCreate, ClientOut, ClientUpdate, MessageResponse
from jobquote.auth import get_current_user

router = APIRouter(prefix="/clients", tags=["clients"])


async def _get_client(db: AsyncSession, user: User, client_id: int) -> Client:
    result = await db.execute(
        select(Client).where(Client.id == client_id, Client.user_id == user.id)
    )
    client = result.scalar_one_or_none()
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.get("", response_model=list[ClientOut])
async def list_clients(
    search: Optional[str] = Query(None, description="Match on name or email"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    query = select(Client).where(Client.user_id == user.id)
    if search:
        term = f"%{search}%"
        query = query.where(or_(Client.name.ilike(term), Client.email.ilike(term)))
    result = await db.execute(query.order_by(Client.name))
    return result.scalars().all()


@router.post("", response_model=ClientOut, status_code=201)
async def create_client(
    data: ClientCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    client = Client(
        user_id=user.id,
        name=data.name.strip(),
        email=data.email or "",
        phone=data.phone,
    )
    db.add(client)
    await db.flush()
    return client


@router.get("/{client_id}", response_model=ClientOut)
async def get_client(
    client_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return await _get_client(db, user, client_id)


@router.patch("/{client_id}", response_model=ClientOut)
async def update_client(
    client_id: int,
    data: ClientUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    client = await _get_client(db, user, client_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(client, field, value)
    await db.flush()
    return client


@router.delete("/{client_id}", response_model=MessageResponse)
async def delete_client(
    client_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Delete a client. Their quotes are kept without a client."""
    client = await _get_client(db, user, client_id)
    result = await db.execute(select(Quote).where(Quote.client_id == client.id))
    for quote in result.scalars().all():
        quote.client_id = None
    await db.delete(client)
    await db.flush()
    return MessageResponse(message="Client deleted")
