"""Line item generation: labour, trade materials and fixed fees.

Item order is part of the contract: labour first, then materials, then the
call-out and compliance fees. Quote screens render items in this order.
"""

import math
from typing import Callable, Optional

from jobquote.models.quote import QuoteLineItem, fee, labour, materials
from jobquote.services.catalog import TradeCategory
from jobquote.services.labour import estimate_hours
from jobquote.services.quantities import extract_quantity

DEFAULT_HOURLY_RATE = 120.0
CALL_OUT_FEE = 65
CALL_OUT_THRESHOLD_HOURS = 2
COMPLIANCE_FEE = 85
COMPLIANCE_CATEGORIES = ("electrical", "plumbing")
MATERIALS_PER_HOUR = 30
FALLBACK_HOURS = 2

MaterialsFn = Callable[[str, float], list[QuoteLineItem]]


def effective_rate(hourly_rate: Optional[float], default: float) -> float:
    """Caller's rate when it is a usable number, otherwise the default."""
    if hourly_rate is None or not math.isfinite(hourly_rate) or hourly_rate <= 0:
        return default
    return hourly_rate


def _has(text: str, *keywords: str) -> bool:
    return any(kw in text for kw in keywords)


# ─── MATERIALS STRATEGIES ────────────────────────────────────────────────────

def _electrical_materials(description: str, hours: float) -> list[QuoteLineItem]:
    text = description.lower()
    if _has(text, "power point", "outlet"):
        qty = extract_quantity(description, ["power point", "outlet", "powerpoint"]) or 2
        return [materials("Power Outlet & Materials", 55, qty)]
    if _has(text, "light", "downlight"):
        qty = extract_quantity(description, ["light", "downlight", "led"]) or 6
        return [materials("LED Downlights & Wiring", 45, qty)]
    if "switchboard" in text:
        return [materials("Switchboard Components", 350)]
    return [materials("Electrical Components", 120)]


def _plumbing_materials(description: str, hours: float) -> list[QuoteLineItem]:
    text = description.lower()
    if _has(text, "tap", "mixer"):
        return [materials("Tap & Fittings", 180)]
    if "toilet" in text:
        return [materials("Toilet Suite & Installation Kit", 320)]
    if "hot water" in text:
        return [materials("Hot Water System", 850)]
    return [materials("Plumbing Materials", 150)]


def _carpentry_materials(description: str, hours: float) -> list[QuoteLineItem]:
    text = description.lower()
    if "deck" in text:
        return [materials("Decking Materials & Hardware", 450)]
    if _has(text, "shelf", "shelves"):
        qty = extract_quantity(description, ["shelf", "shelves"]) or 2
        return [materials("Shelf & Mounting Hardware", 35, qty)]
    if "kitchen" in text:
        return [materials("Kitchen Installation Materials", 800)]
    if "bathroom" in text:
        return [materials("Bathroom Renovation Materials", 650)]
    return [materials("Timber & Hardware", 180)]


def _painting_materials(description: str, hours: float) -> list[QuoteLineItem]:
    return [materials("Paint & Materials", 180)]


def _landscaping_materials(description: str, hours: float) -> list[QuoteLineItem]:
    text = description.lower()
    if "fence" in text:
        return [materials("Fencing Materials", 450)]
    if _has(text, "garden", "plant"):
        return [materials("Plants & Garden Materials", 250)]
    return [materials("Landscaping Materials", 200)]


def _concrete_materials(description: str, hours: float) -> list[QuoteLineItem]:
    return [materials("Concrete & Materials", 380)]


def _automotive_materials(description: str, hours: float) -> list[QuoteLineItem]:
    text = description.lower()
    if "dual battery" in text:
        return [materials("Dual Battery System Kit", 750)]
    if "light bar" in text:
        return [materials("LED Light Bar & Wiring Kit", 320)]
    if "dash cam" in text:
        return [materials("Dash Camera & Installation Kit", 280)]
    if "uhf" in text:
        return [materials("UHF Radio & Antenna Kit", 250)]
    return [materials("Automotive Parts & Materials", 200)]


def _generic_materials(description: str, hours: float) -> list[QuoteLineItem]:
    # round half up; hours are multiples of 0.5 so no ties arise
    return [materials("Materials and Supplies", math.floor(hours * MATERIALS_PER_HOUR + 0.5))]


MATERIALS_STRATEGIES: dict[str, MaterialsFn] = {
    "electrical": _electrical_materials,
    "plumbing": _plumbing_materials,
    "carpentry": _carpentry_materials,
    "handyman": _carpentry_materials,
    "renovation": _carpentry_materials,
    "painting": _painting_materials,
    "landscaping": _landscaping_materials,
    "fencing": _landscaping_materials,
    "concrete": _concrete_materials,
    "paving": _concrete_materials,
    "automotive": _automotive_materials,
}


# ─── ITEM LISTS ──────────────────────────────────────────────────────────────

def generate_items(
    description: str,
    trade: TradeCategory,
    hourly_rate: Optional[float] = None,
) -> list[QuoteLineItem]:
    """Full ordered item list for a classified job."""
    rate = effective_rate(hourly_rate, trade.default_hourly_rate)
    hours = estimate_hours(description, trade)

    items = [labour(f"Professional {trade.display_name} Service", hours, rate)]

    strategy = MATERIALS_STRATEGIES.get(trade.category, _generic_materials)
    items.extend(strategy(description, hours))

    if hours < CALL_OUT_THRESHOLD_HOURS:
        items.append(fee("Service Call-Out Fee", CALL_OUT_FEE))

    if trade.compliance and trade.category in COMPLIANCE_CATEGORIES:
        items.append(fee("Testing & Compliance", COMPLIANCE_FEE))

    return items


def generate_fallback_items(
    hourly_rate: Optional[float] = None,
    default_rate: float = DEFAULT_HOURLY_RATE,
) -> list[QuoteLineItem]:
    """Fixed bundle for descriptions no trade matched.

    The 2 h baseline here does not go through the labour estimator.
    """
    rate = effective_rate(hourly_rate, default_rate)
    return [
        labour("Professional Service", FALLBACK_HOURS, rate),
        materials("Materials & Supplies", FALLBACK_HOURS * MATERIALS_PER_HOUR),
        fee("Service Call-Out", CALL_OUT_FEE),
    ]
