"""Job titles and professional summaries for generated quotes.

Titles are deterministic. Summaries are picked at random from a small set
of templates per trade group, so callers that need repeatable output must
pass a seeded random.Random.
"""

import random
from typing import Callable, Optional

from jobquote.services.catalog import TradeCategory
from jobquote.services.quantities import extract_quantity

UNCLASSIFIED_TITLE = "Professional Trade Service"
UNCLASSIFIED_SUMMARY = (
    "Professional trade service completed to industry standards "
    "with quality workmanship and materials."
)

_rng = random.Random()

TitleFn = Callable[[str, str], Optional[str]]


def _counted(description: str, keywords: list[str], with_qty: str, without_qty: str) -> str:
    qty = extract_quantity(description, keywords)
    return with_qty.format(qty=qty) if qty else without_qty


# ─── TITLE STRATEGIES ────────────────────────────────────────────────────────
# Each returns a title, or None to fall back to the subcategory name.

def _electrical_title(description: str, text: str) -> Optional[str]:
    if "power point" in text or "outlet" in text:
        return _counted(description, ["power point", "outlet", "powerpoint"],
                        "{qty} Power Point Installation", "Power Point Installation")
    if "light" in text or "downlight" in text:
        return _counted(description, ["light", "downlight", "led"],
                        "{qty} LED Downlight Installation", "LED Lighting Installation")
    if "switchboard" in text:
        return "Switchboard Upgrade"
    if "solar" in text:
        return "Solar Panel Installation"
    if "ev charger" in text:
        return "EV Charger Installation"
    return "Electrical Installation"


def _plumbing_title(description: str, text: str) -> Optional[str]:
    if "hot water" in text:
        return "Hot Water System Installation"
    if "toilet" in text:
        return "Toilet Installation"
    if "tap" in text or "mixer" in text:
        return "Tap Installation"
    return "Plumbing Service"


def _automotive_title(description: str, text: str) -> Optional[str]:
    if "dual battery" in text:
        return "Dual Battery System Installation"
    if "light bar" in text:
        return "LED Light Bar Installation"
    if "dash cam" in text:
        return "Dash Camera Installation"
    if "uhf" in text:
        return "UHF Radio Installation"
    return "4WD Modification Service"


def _carpentry_title(description: str, text: str) -> Optional[str]:
    if "deck" in text:
        return "Timber Decking Installation"
    if "pergola" in text:
        return "Pergola Construction"
    return "Carpentry Service"


def _handyman_title(description: str, text: str) -> Optional[str]:
    if "shelf" in text or "shelves" in text:
        return _counted(description, ["shelf", "shelves"],
                        "{qty} Shelf Installation", "Shelf Installation")
    return "Handyman Service"


def _painting_title(description: str, text: str) -> Optional[str]:
    if "interior" in text:
        return "Interior Painting"
    if "exterior" in text:
        return "Exterior Painting"
    return "Professional Painting Service"


def _landscaping_title(description: str, text: str) -> Optional[str]:
    if "fence" in text:
        return "Fencing Installation"
    if "garden" in text:
        return "Garden Landscaping"
    return "Landscaping Service"


def _concrete_title(description: str, text: str) -> Optional[str]:
    if "driveway" in text:
        return "Concrete Driveway"
    return "Concrete Work"


def _renovation_title(description: str, text: str) -> Optional[str]:
    if "bathroom" in text:
        return "Bathroom Renovation"
    if "kitchen" in text:
        return "Kitchen Renovation"
    return "Renovation Service"


TITLE_STRATEGIES: dict[str, TitleFn] = {
    "electrical": _electrical_title,
    "plumbing": _plumbing_title,
    "automotive": _automotive_title,
    "carpentry": _carpentry_title,
    "handyman": _handyman_title,
    "painting": _painting_title,
    "landscaping": _landscaping_title,
    "concrete": _concrete_title,
    "tiling": lambda description, text: "Tiling Installation",
    "roofing": lambda description, text: "Roofing Service",
    "hvac": lambda description, text: "Air Conditioning Installation",
    "renovation": _renovation_title,
}


def job_title(description: str, trade: Optional[TradeCategory]) -> str:
    if trade is None:
        return UNCLASSIFIED_TITLE
    strategy = TITLE_STRATEGIES.get(trade.category)
    title = strategy(description, description.lower()) if strategy else None
    return title or f"{trade.display_name} Service"


# ─── SUMMARIES ───────────────────────────────────────────────────────────────

SUMMARY_TEMPLATES: dict[str, tuple[str, ...]] = {
    "electrical": (
        "Professional electrical installation completed to Australian standards with quality materials and expert workmanship.",
        "Expert electrical work with comprehensive testing and compliance certification for safety and reliability.",
        "Quality electrical service using premium components and professional techniques, fully compliant with regulations.",
    ),
    "plumbing": (
        "Professional plumbing service completed to Australian standards with quality materials and warranty coverage.",
        "Expert plumbing installation with proper testing and compliance for long-lasting, reliable operation.",
        "Quality plumbing work using premium materials and professional techniques, fully guaranteed.",
    ),
    "automotive": (
        "Professional automotive installation using quality brands with expert workmanship and attention to detail.",
        "Custom automotive modification service with premium components and professional installation.",
        "Mobile automotive service with quality parts and expert installation, completed to industry standards.",
    ),
    "carpentry": (
        "Professional carpentry work using quality materials and traditional techniques, built to last.",
        "Expert timber work with attention to detail and quality craftsmanship, completed to building standards.",
        "Quality carpentry service using premium materials and professional techniques with warranty.",
    ),
    "handyman": (
        "Professional handyman service with quality workmanship and attention to detail.",
        "Expert installation and repair work completed to high standards with quality materials.",
        "Reliable handyman service with professional results and customer satisfaction guaranteed.",
    ),
    "renovation": (
        "Complete renovation delivered to Australian building standards with quality fixtures and finishes.",
        "Expert renovation work managed from preparation through to final clean, with attention to every detail.",
        "Quality renovation service using premium materials and experienced tradespeople, fully guaranteed.",
    ),
    "painting": (
        "Professional painting service with thorough surface preparation and premium paints for a lasting finish.",
        "Expert painting work completed cleanly and on schedule, with careful protection of surrounding areas.",
        "Quality painting service using professional techniques for an even, durable result.",
    ),
    "landscaping": (
        "Professional landscaping service using healthy plants and quality materials suited to local conditions.",
        "Expert outdoor work completed with care for your property and a tidy site on completion.",
        "Quality landscaping service designed to look great and stay low maintenance.",
    ),
}

DEFAULT_SUMMARY_TEMPLATES = (
    "Professional {trade} service completed to industry standards with quality workmanship.",
    "Expert {trade} work with attention to detail and quality results, fully guaranteed.",
    "Quality {trade} service using premium materials and professional techniques.",
)


def summary_templates(trade: TradeCategory) -> tuple[str, ...]:
    """Every summary summary() can return for this trade."""
    templates = SUMMARY_TEMPLATES.get(trade.category)
    if templates is not None:
        return templates
    name = trade.display_name.lower()
    return tuple(t.format(trade=name) for t in DEFAULT_SUMMARY_TEMPLATES)


def summary(
    description: str,
    trade: Optional[TradeCategory],
    rng: Optional[random.Random] = None,
) -> str:
    """Random professional summary; not deterministic unless rng is seeded."""
    if trade is None:
        return UNCLASSIFIED_SUMMARY
    return (rng or _rng).choice(summary_templates(trade))
