"""Pydantic schemas for API requests and responses."""

from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field

ItemType = Literal["labour", "materials", "other"]
ItemUnit = Literal["hours", "each", "fixed"]


# ─── AUTH ────────────────────────────────────────────────────────────────────

class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    business_name: str = ""

class UserLogin(BaseModel):
    email: str
    password: str

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class UserOut(BaseModel):
    id: int
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}

class BusinessProfileOut(BaseModel):
    business_name: str
    abn: str
    phone: str
    email: str
    payment_terms: str
    quote_footer: str
    bank_name: str
    bsb: str
    account_number: str
    account_name: str
    hourly_rate: float
    gst_enabled: bool
    country: str

    model_config = {"from_attributes": True}

class BusinessProfileUpdate(BaseModel):
    business_name: Optional[str] = None
    abn: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    payment_terms: Optional[str] = None
    quote_footer: Optional[str] = None
    bank_name: Optional[str] = None
    bsb: Optional[str] = None
    account_number: Optional[str] = None
    account_name: Optional[str] = None
    hourly_rate: Optional[float] = None
    gst_enabled: Optional[bool] = None
    country: Optional[str] = None


# ─── CLIENTS ─────────────────────────────────────────────────────────────────

class ClientCreate(BaseModel):
    name: str = Field(min_length=1)
    email: Optional[EmailStr] = None
    phone: str = ""

class ClientUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None

class ClientOut(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    created_at: datetime

    model_config = {"from_attributes": True}


# ─── ESTIMATION ──────────────────────────────────────────────────────────────

class GenerateQuoteRequest(BaseModel):
    job_description: str
    client_email: Optional[EmailStr] = None
    hourly_rate: Optional[float] = None
    gst_enabled: bool = True

class EstimateItemOut(BaseModel):
    name: str
    type: ItemType
    qty: float
    cost: float
    unit: ItemUnit

class GenerateQuoteResponse(BaseModel):
    job_title: str
    summary: str
    items: list[EstimateItemOut]
    subtotal: float
    gst: float
    total: float


# ─── QUOTES ──────────────────────────────────────────────────────────────────

class FastQuoteRequest(BaseModel):
    client_id: int
    job_description: str = Field(min_length=1)

class QuoteItemIn(BaseModel):
    name: str = Field(min_length=1)
    type: ItemType
    quantity: float = Field(gt=0)
    unit_price: float = Field(ge=0)
    unit: Optional[ItemUnit] = None

class QuoteItemOut(BaseModel):
    id: int
    position: int
    type: str
    name: str
    quantity: float
    unit: str
    unit_price: float
    total: float

    model_config = {"from_attributes": True}

class QuoteOut(BaseModel):
    id: int
    client_id: Optional[int]
    job_title: str
    description: str
    status: str
    subtotal: float
    gst_amount: float
    total: float
    approval_token: str
    created_at: datetime
    updated_at: datetime
    items: list[QuoteItemOut] = []

    model_config = {"from_attributes": True}

class QuoteUpdate(BaseModel):
    job_title: Optional[str] = None
    description: Optional[str] = None
    items: Optional[list[QuoteItemIn]] = None

class QuoteListResponse(BaseModel):
    total: int
    quotes: list[QuoteOut]


# ─── APPROVALS ───────────────────────────────────────────────────────────────

class ApprovalView(BaseModel):
    business_name: str
    job_title: str
    description: str
    status: str
    subtotal: float
    gst_amount: float
    total: float
    items: list[QuoteItemOut]

class ApprovalDecision(BaseModel):
    approved: bool


# ─── INVOICES ────────────────────────────────────────────────────────────────

class InvoiceCreate(BaseModel):
    downpayment_amount: Optional[float] = Field(default=None, gt=0)

class InvoiceUpdate(BaseModel):
    invoice_number: Optional[str] = None
    due_date: Optional[date] = None

class InvoiceOut(BaseModel):
    id: int
    quote_id: int
    invoice_number: str
    total: float
    due_date: Optional[date]
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str
