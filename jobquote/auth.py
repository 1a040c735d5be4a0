"""Tradesperson accounts: password checks and the bearer token on every business route.

A token identifies one sole trader. Everything they own (clients, quotes,
invoices, the business profile) is looked up through ``get_current_user``.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobquote.config import get_settings
from jobquote.models.database import User, get_db

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
bearer_scheme = HTTPBearer()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


async def authenticate(db: AsyncSession, email: str, password: str) -> Optional[User]:
    """The account for this email and password, or None. Emails are case-insensitive."""
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    user = result.scalar_one_or_none()
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


def create_access_token(user_id: int, email: str, business_name: str = "") -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    claims = {"sub": str(user_id), "email": email, "business": business_name, "exp": expire}
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        raise _unauthorized("Session expired or invalid, please log in again")


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """The logged-in tradesperson. 401 when the token is bad or the account is gone."""
    claims = decode_token(credentials.credentials)
    try:
        user_id = int(claims.get("sub", 0))
    except (TypeError, ValueError):
        raise _unauthorized("Session expired or invalid, please log in again")

    user = await db.get(User, user_id)
    if user is None:
        raise _unauthorized("Account no longer exists")
    return user
