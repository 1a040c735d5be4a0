"""Quote estimator: turns a job description into a priced QuoteResult.

This is the single entry point shared by the hosted /generate-quote
endpoint and the in-app fast quote flow.
"""

import logging
import random
from typing import Optional

from jobquote.models.quote import QuoteResult
from jobquote.services.catalog import DEFAULT_CATALOG, TradeCatalog
from jobquote.services.classifier import classify
from jobquote.services.items import DEFAULT_HOURLY_RATE, generate_fallback_items, generate_items
from jobquote.services.titles import job_title, summary
from jobquote.services.totals import GST_RATE, compute_totals

logger = logging.getLogger("jobquote.estimator")


def estimate_quote(
    description: str,
    hourly_rate: Optional[float] = None,
    gst_enabled: bool = True,
    catalog: TradeCatalog = DEFAULT_CATALOG,
    rng: Optional[random.Random] = None,
    default_rate: float = DEFAULT_HOURLY_RATE,
    tax_rate: float = GST_RATE,
) -> QuoteResult:
    """Classify, price and title one job. Never raises for any string input."""
    description = (description or "").strip()
    trade = classify(description, catalog)

    if trade is not None:
        items = generate_items(description, trade, hourly_rate)
        logger.info(f"Detected trade: {trade.category} - {trade.subcategory}")
    else:
        items = generate_fallback_items(hourly_rate, default_rate)
        logger.info("No trade detected, using generic service bundle")

    totals = compute_totals(items, gst_enabled, tax_rate)

    return QuoteResult(
        job_title=job_title(description, trade),
        summary=summary(description, trade, rng),
        items=tuple(items),
        subtotal=totals.subtotal,
        tax_amount=totals.tax_amount,
        total=totals.total,
        category=trade,
    )
