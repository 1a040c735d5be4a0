from jobquote.services.catalog import DEFAULT_CATALOG, TradeCatalog, TradeCategory, load_catalog
from jobquote.services.classifier import classify
from jobquote.services.quantities import extract_quantity
from jobquote.services.labour import estimate_hours
from jobquote.services.items import generate_fallback_items, generate_items
from jobquote.services.totals import compute_totals, format_currency
from jobquote.services.titles import job_title, summary
from jobquote.services.estimator import estimate_quote
