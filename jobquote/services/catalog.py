"""Trade catalog: the fixed list of trades the classifier scores against.

The catalog is an immutable value built once at startup and passed by
reference into the engine. The built-in list covers Australian sole
traders; an alternate list can be loaded from a JSON file.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional

logger = logging.getLogger("jobquote.catalog")


@dataclass(frozen=True)
class TradeCategory:
    category: str
    subcategory: str
    keywords: tuple[str, ...]
    default_hourly_rate: float
    common_items: tuple[str, ...] = ()
    compliance: Optional[str] = None

    def __post_init__(self):
        if not self.keywords:
            raise ValueError(f"Trade '{self.subcategory}' has no keywords")
        if not self.default_hourly_rate > 0:
            raise ValueError(
                f"Trade '{self.subcategory}' needs a positive default hourly rate"
            )

    @property
    def display_name(self) -> str:
        """'hot_water_installer' -> 'Hot Water Installer'"""
        return " ".join(w.capitalize() for w in self.subcategory.split("_") if w)

    @classmethod
    def from_dict(cls, data: dict) -> "TradeCategory":
        return cls(
            category=data["category"],
            subcategory=data["subcategory"],
            keywords=tuple(data["keywords"]),
            default_hourly_rate=float(data["default_hourly_rate"]),
            common_items=tuple(data.get("common_items", ())),
            compliance=data.get("compliance"),
        )


@dataclass(frozen=True)
class TradeCatalog:
    """Ordered, read-only collection of trades. Order breaks classifier ties."""
    categories: tuple[TradeCategory, ...]

    def __post_init__(self):
        if not self.categories:
            raise ValueError("Trade catalog is empty")

    def __iter__(self) -> Iterator[TradeCategory]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)

    def get(self, subcategory: str) -> Optional[TradeCategory]:
        for trade in self.categories:
            if trade.subcategory == subcategory:
                return trade
        return None

    @classmethod
    def of(cls, trades: Iterable[TradeCategory]) -> "TradeCatalog":
        return cls(tuple(trades))


# ─── BUILT-IN TRADES ─────────────────────────────────────────────────────────

TRADE_CATEGORIES = (
    # Electrical & data
    TradeCategory(
        "electrical", "residential_electrician",
        ("electrical", "electrician", "wiring", "power", "lights", "lighting",
         "outlet", "socket", "powerpoint", "gpo", "switchboard", "rcd",
         "safety switch", "downlight", "led"),
        120,
        ("Electrical labour", "Cable and wiring", "Power outlets",
         "Light fittings", "Safety switches"),
        "AS/NZS 3000 electrical standards",
    ),
    TradeCategory(
        "electrical", "data_cabling",
        ("data cabling", "network", "ethernet", "cat6", "cat5", "internet",
         "wifi", "router", "modem"),
        110,
        ("Data cabling installation", "Network points", "Patch panels",
         "Cable testing"),
        "AS/CA S008 cabling standards",
    ),
    TradeCategory(
        "electrical", "solar_installer",
        ("solar", "panels", "inverter", "battery", "renewable", "grid tie",
         "off grid"),
        130,
        ("Solar panel installation", "Inverter setup", "Battery system",
         "Grid connection"),
        "Clean Energy Council standards",
    ),
    TradeCategory(
        "electrical", "ev_charger",
        ("ev charger", "electric vehicle", "car charger", "tesla",
         "charging station"),
        125,
        ("EV charger installation", "Electrical upgrade", "Dedicated circuit"),
        "AS/NZS 3000 EV charging standards",
    ),
    # Plumbing & gas
    TradeCategory(
        "plumbing", "maintenance_plumber",
        ("plumbing", "plumber", "pipes", "water", "drainage", "leak", "tap",
         "toilet", "shower", "basin", "faucet", "mixer"),
        110,
        ("Plumbing labour", "Pipe fittings", "Taps and mixers", "Toilet repairs"),
        "AS/NZS 3500 plumbing standards",
    ),
    TradeCategory(
        "plumbing", "gas_fitter",
        ("gas", "gas fitting", "gas line", "gas appliance", "gas heater",
         "gas stove", "gas hot water"),
        120,
        ("Gas line installation", "Gas appliance connection",
         "Gas safety testing"),
        "AS/NZS 5601 gas installation standards",
    ),
    TradeCategory(
        "plumbing", "hot_water_installer",
        ("hot water", "water heater", "instantaneous", "storage",
         "gas hot water", "electric hot water"),
        115,
        ("Hot water system", "Installation labour", "Pipe connections",
         "Gas/electrical connections"),
        "AS/NZS 3500 hot water standards",
    ),
    # Building, carpentry & renovations
    TradeCategory(
        "carpentry", "carpenter",
        ("carpenter", "carpentry", "timber", "wood", "framing", "decking",
         "pergola", "shed", "deck"),
        95,
        ("Carpentry labour", "Timber materials", "Hardware and fixings",
         "Structural work"),
        "Australian Building Code",
    ),
    TradeCategory(
        "handyman", "general_handyman",
        ("handyman", "maintenance", "repair", "fix", "install", "mount", "hang",
         "general repairs", "shelf", "shelves", "floating shelf"),
        85,
        ("Handyman labour", "General materials", "Hardware and fixings",
         "Minor repairs"),
        "General building standards",
    ),
    TradeCategory(
        "renovation", "kitchen_installer",
        ("kitchen", "kitchen renovation", "kitchen install", "cabinetry",
         "benchtop", "splashback"),
        100,
        ("Kitchen installation", "Cabinetry", "Benchtops",
         "Hardware and fittings"),
        "Australian Building Code",
    ),
    TradeCategory(
        "renovation", "bathroom_installer",
        ("bathroom", "bathroom renovation", "ensuite", "vanity",
         "shower screen", "tiles", "shower caddy", "towel rail"),
        105,
        ("Bathroom renovation", "Tiling work", "Waterproofing",
         "Fixtures and fittings"),
        "AS 3740 waterproofing standards",
    ),
    # Painting
    TradeCategory(
        "painting", "interior_painter",
        ("painting", "painter", "interior", "walls", "ceiling", "primer",
         "paint"),
        75,
        ("Painting labour", "Paint and primer", "Surface preparation",
         "Brushes and rollers"),
        "Australian paint standards",
    ),
    TradeCategory(
        "painting", "exterior_painter",
        ("exterior painting", "house painting", "weatherboard", "render",
         "fence painting"),
        80,
        ("Exterior painting", "Weather-resistant paint", "Surface preparation",
         "Scaffolding"),
        "Weather protection standards",
    ),
    # Landscaping & outdoors
    TradeCategory(
        "landscaping", "landscaper",
        ("landscaping", "garden", "plants", "irrigation", "retaining wall",
         "paving", "turf"),
        85,
        ("Landscaping labour", "Plants and materials", "Irrigation components",
         "Soil and mulch"),
        "Horticulture standards",
    ),
    TradeCategory(
        "landscaping", "lawn_mowing",
        ("lawn mowing", "grass cutting", "hedge trimming",
         "garden maintenance"),
        60,
        ("Lawn mowing service", "Garden maintenance", "Green waste removal"),
        "Garden maintenance standards",
    ),
    TradeCategory(
        "fencing", "fencer",
        ("fencing", "fence", "gate", "colorbond", "timber fence", "pool fence"),
        90,
        ("Fencing materials", "Posts and rails", "Gates and hardware",
         "Installation labour"),
        "AS 1926 swimming pool fencing",
    ),
    # Concrete & driveways
    TradeCategory(
        "concrete", "concreter",
        ("concrete", "concreting", "driveway", "slab", "footpath",
         "exposed aggregate"),
        95,
        ("Concrete supply", "Reinforcement", "Formwork", "Finishing labour"),
        "AS 3600 concrete structures",
    ),
    TradeCategory(
        "paving", "paver",
        ("paving", "pavers", "brick paving", "stone paving", "driveway paving"),
        85,
        ("Paving materials", "Sand and cement", "Edge restraints",
         "Installation labour"),
        "Paving installation standards",
    ),
    # Tiling & flooring
    TradeCategory(
        "tiling", "tiler",
        ("tiling", "tiles", "floor tiles", "wall tiles", "bathroom tiles",
         "kitchen tiles"),
        90,
        ("Tiles and materials", "Adhesive and grout", "Waterproofing",
         "Tiling labour"),
        "AS 3958 tiling standards",
    ),
    TradeCategory(
        "flooring", "floor_installer",
        ("flooring", "laminate", "timber floor", "vinyl", "carpet",
         "floor installation"),
        85,
        ("Flooring materials", "Underlay", "Installation labour",
         "Finishing trim"),
        "Flooring installation standards",
    ),
    # Roofing
    TradeCategory(
        "roofing", "roofer",
        ("roofing", "roof", "tiles", "metal roof", "colorbond", "roof repair",
         "guttering"),
        100,
        ("Roofing materials", "Guttering", "Flashing", "Installation labour"),
        "AS 1562 roofing standards",
    ),
    # Heating & cooling
    TradeCategory(
        "hvac", "aircon_installer",
        ("air conditioning", "aircon", "split system", "ducted", "heating",
         "cooling"),
        115,
        ("Air conditioning unit", "Installation labour", "Refrigerant",
         "Electrical connections"),
        "Refrigeration handling license",
    ),
    # Windows & glazing
    TradeCategory(
        "glazing", "glazier",
        ("glass", "glazing", "windows", "shower screen", "splashback", "mirror"),
        95,
        ("Glass materials", "Installation labour", "Sealants", "Hardware"),
        "AS 1288 glass standards",
    ),
    # Security & access
    TradeCategory(
        "security", "locksmith",
        ("locksmith", "locks", "security", "deadlock", "door lock", "safe"),
        110,
        ("Lock hardware", "Installation labour", "Key cutting",
         "Security assessment"),
        "Security installation standards",
    ),
    TradeCategory(
        "security", "cctv_installer",
        ("cctv", "security camera", "surveillance", "alarm system",
         "security system"),
        105,
        ("CCTV equipment", "Cabling", "Installation labour", "System setup"),
        "Security equipment standards",
    ),
    # Cleaning
    TradeCategory(
        "cleaning", "pressure_washing",
        ("pressure washing", "pressure cleaning", "driveway cleaning",
         "house washing"),
        70,
        ("Pressure washing service", "Cleaning chemicals", "Equipment hire"),
        "Environmental cleaning standards",
    ),
    # Automotive
    TradeCategory(
        "automotive", "auto_electrician",
        ("auto electrician", "car electrical", "dual battery", "dash cam",
         "uhf radio", "trailer wiring"),
        120,
        ("Auto electrical labour", "Wiring and cables", "Switches and fuses",
         "Electrical components"),
        "Automotive electrical standards",
    ),
    TradeCategory(
        "automotive", "fourwd_modifier",
        ("4wd", "light bar", "winch", "bull bar", "canopy", "drawers", "redarc",
         "victron"),
        110,
        ("4WD accessories", "Installation labour", "Wiring and mounting",
         "Custom fabrication"),
        "Vehicle modification standards",
    ),
    TradeCategory(
        "automotive", "mobile_mechanic",
        ("mobile mechanic", "car service", "brake repair", "suspension",
         "exhaust", "tune up"),
        100,
        ("Mechanical labour", "Parts and components", "Fluids and filters",
         "Diagnostic testing"),
        "Automotive repair standards",
    ),
)

DEFAULT_CATALOG = TradeCatalog(TRADE_CATEGORIES)


def load_catalog(path: str = "") -> TradeCatalog:
    """Load a catalog from a JSON list of trades, or the built-in one.

    Raises ValueError (or a JSON/OS error) for a malformed file; this is a
    startup failure, never a request failure.
    """
    if not path:
        return DEFAULT_CATALOG

    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"Trade catalog {path} must be a JSON list")
    catalog = TradeCatalog.of(TradeCategory.from_dict(entry) for entry in raw)
    logger.info(f"Loaded {len(catalog)} trades from {path}")
    return catalog
