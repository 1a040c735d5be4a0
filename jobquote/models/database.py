"""SQLAlchemy models and async database engine."""

import secrets
from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Float, Boolean, DateTime, Date, Text, ForeignKey,
    Index,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from jobquote.config import get_settings

Base = declarative_base()

# ─── MODELS ──────────────────────────────────────────────────────────────────

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    business_profile = relationship(
        "BusinessProfile", back_populates="user", uselist=False, cascade="all, delete-orphan",
    )
    clients = relationship("Client", back_populates="user", cascade="all, delete-orphan")
    quotes = relationship("Quote", back_populates="user", cascade="all, delete-orphan")


class BusinessProfile(Base):
    """Tradesperson's business details, rate and GST preference."""
    __tablename__ = "business_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)

    business_name = Column(String(255), default="")
    abn = Column(String(20), default="")
    phone = Column(String(50), default="")
    email = Column(String(255), default="")
    payment_terms = Column(Text, default="")
    quote_footer = Column(Text, default="")

    # Payment details printed on invoices
    bank_name = Column(String(255), default="")
    bsb = Column(String(10), default="")
    account_number = Column(String(50), default="")
    account_name = Column(String(255), default="")

    hourly_rate = Column(Float, default=120.0)
    gst_enabled = Column(Boolean, default=True)
    country = Column(String(2), default="AU")

    user = relationship("User", back_populates="business_profile")


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), default="")
    phone = Column(String(50), default="")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="clients")


def _approval_token() -> str:
    return secrets.token_urlsafe(24)


class Quote(Base):
    """A saved quote. Totals are stored as generated or last edited."""
    __tablename__ = "quotes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True)

    job_title = Column(String(255), default="")
    description = Column(Text, default="")           # professional summary shown to the customer
    status = Column(String(20), default="draft")      # draft, sent, approved, rejected

    subtotal = Column(Float, default=0.0)
    gst_amount = Column(Float, default=0.0)
    total = Column(Float, default=0.0)

    approval_token = Column(String(64), unique=True, nullable=False, default=_approval_token)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="quotes")
    client = relationship("Client")
    items = relationship(
        "QuoteItem", back_populates="quote", cascade="all, delete-orphan",
        order_by="QuoteItem.position", passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_quotes_user", "user_id"),
        Index("ix_quotes_status", "status"),
    )


class QuoteItem(Base):
    __tablename__ = "quote_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    quote_id = Column(Integer, ForeignKey("quotes.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)  # display order
    type = Column(String(20), nullable=False)              # labour, materials, other
    name = Column(String(255), nullable=False)
    quantity = Column(Float, nullable=False)
    unit = Column(String(10), default="each")              # hours, each, fixed
    unit_price = Column(Float, nullable=False)
    total = Column(Float, nullable=False)

    quote = relationship("Quote", back_populates="items")


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    quote_id = Column(Integer, ForeignKey("quotes.id"), nullable=False, index=True)
    invoice_number = Column(String(50), nullable=False)
    total = Column(Float, default=0.0)
    due_date = Column(Date, nullable=True)
    status = Column(String(20), default="unpaid")  # unpaid, sent, paid

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    quote = relationship("Quote")


# ─── DATABASE ENGINE ─────────────────────────────────────────────────────────

def get_engine():
    settings = get_settings()
    return create_async_engine(settings.database_url, echo=settings.database_echo)


_engine = None
_session_factory = None


def get_session_factory():
    global _engine, _session_factory
    if _session_factory is None:
        _engine = get_engine()
        _session_factory = async_sessionmaker(_engine, class_=AsyncSession, expire_on_commit=False)
    return _session_factory


async def init_db():
    """Create all tables."""
    get_session_factory()  # ensures _engine is initialized
    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_db():
    """Close pooled connections and forget the engine."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


async def get_db():
    """FastAPI dependency for database sessions."""
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
