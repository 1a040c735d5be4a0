"""Auth endpoints: register, login, business profile management."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobquote.config import get_settings
from jobquote.models.database import BusinessProfile, User, get_db
from jobquote.models.schemas import (
    BusinessProfileOut, BusinessProfileUpdate, Token, UserCreate, UserLogin, UserOut,
)
from jobquote.auth import authenticate, create_access_token, get_current_user, hash_password
from jobquote.services.quotes import get_or_create_profile

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=Token)
async def register(data: UserCreate, db: AsyncSession = Depends(get_db)):
    """Register a new tradesperson account with an empty business profile."""
    email = data.email.lower()
    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none():
        raise HTTPException(status_code=400, detail="Email already registered")

    settings = get_settings()
    user = User(
        email=email,
        hashed_password=hash_password(data.password),
        business_profile=BusinessProfile(
            business_name=data.business_name,
            email=email,
            hourly_rate=settings.default_hourly_rate,
        ),
    )
    db.add(user)
    await db.flush()

    token = create_access_token(user.id, user.email, data.business_name)
    return Token(access_token=token)


@router.post("/login", response_model=Token)
async def login(data: UserLogin, db: AsyncSession = Depends(get_db)):
    """Log in with email and password; the token carries the business name."""
    user = await authenticate(db, data.email, data.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    profile = await get_or_create_profile(db, user)
    token = create_access_token(user.id, user.email, profile.business_name or "")
    return Token(access_token=token)


@router.get("/me", response_model=UserOut)
async def me(user: User = Depends(get_current_user)):
    return user


@router.get("/profile", response_model=BusinessProfileOut)
async def get_profile(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_or_create_profile(db, user)


@router.patch("/profile", response_model=BusinessProfileOut)
async def update_profile(
    data: BusinessProfileUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update business details, hourly rate and GST preference."""
    settings = get_settings()
    update_data = data.model_dump(exclude_unset=True)

    rate = update_data.get("hourly_rate")
    if rate is not None and not settings.min_hourly_rate <= rate <= settings.max_hourly_rate:
        raise HTTPException(
            status_code=400,
            detail=(
                f"Hourly rate must be between ${settings.min_hourly_rate:.0f} "
                f"and ${settings.max_hourly_rate:.0f}"
            ),
        )

    profile = await get_or_create_profile(db, user)
    for field, value in update_data.items():
        if value is not None:
            setattr(profile, field, value)
    await db.flush()
    return profile
