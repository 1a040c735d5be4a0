from jobquote.models.database import (
    Base, User, BusinessProfile, Client, Quote, QuoteItem, Invoice,
    get_engine, get_session_factory, get_db, init_db, dispose_db,
)
from jobquote.models.quote import (
    LineItemType, UnitKind, QuoteLineItem, QuoteTotals, QuoteResult,
)
