import math

import pytest

from jobquote.models.quote import LineItemType, UnitKind
from jobquote.services.catalog import DEFAULT_CATALOG
from jobquote.services.items import generate_fallback_items, generate_items


def _summary(items):
    return [(i.name, i.type.value, i.qty, i.cost) for i in items]


def test_double_power_points(electrician):
    items = generate_items("install 4 double power points", electrician, 120)
    assert _summary(items) == [
        ("Professional Residential Electrician Service", "labour", 2.0, 120),
        ("Power Outlet & Materials", "materials", 4, 55),
        ("Testing & Compliance", "other", 1, 85),
    ]


def test_leaky_tap(plumber):
    items = generate_items("fix a leaky tap", plumber)
    assert _summary(items) == [
        ("Professional Maintenance Plumber Service", "labour", 1.0, 110),
        ("Tap & Fittings", "materials", 1, 180),
        ("Service Call-Out Fee", "other", 1, 65),
        ("Testing & Compliance", "other", 1, 85),
    ]


def test_labour_is_always_first(electrician):
    items = generate_items("install 10 downlights", electrician)
    assert items[0].type is LineItemType.LABOUR
    assert items[0].unit is UnitKind.HOURS
    assert items[1].name == "LED Downlights & Wiring"
    assert (items[1].qty, items[1].cost) == (10, 45)


def test_downlights_default_to_six(electrician):
    items = generate_items("replace the lights in the lounge", electrician)
    assert (items[1].name, items[1].qty) == ("LED Downlights & Wiring", 6)


def test_short_job_gets_one_call_out_fee(handyman):
    items = generate_items("hang a mirror", handyman)
    names = [i.name for i in items]
    assert names == [
        "Professional General Handyman Service",
        "Timber & Hardware",
        "Service Call-Out Fee",
    ]
    assert names.count("Service Call-Out Fee") == 1


def test_no_call_out_at_two_hours(electrician):
    items = generate_items("install 4 double power points", electrician)
    assert "Service Call-Out Fee" not in [i.name for i in items]


def test_compliance_only_for_electrical_and_plumbing():
    tiler = DEFAULT_CATALOG.get("tiler")
    items = generate_items("tile 10 square metres", tiler)
    assert "Testing & Compliance" not in [i.name for i in items]


def test_category_without_strategy_uses_hours_based_materials():
    tiler = DEFAULT_CATALOG.get("tiler")
    items = generate_items("tile 10 square metres", tiler)
    assert _summary(items) == [
        ("Professional Tiler Service", "labour", 5.0, 90),
        ("Materials and Supplies", "materials", 1, 150),
    ]


def test_unmatched_group_bundle_for_data_cabling():
    cabling = DEFAULT_CATALOG.get("data_cabling")
    items = generate_items("run ethernet to the office", cabling)
    assert _summary(items) == [
        ("Professional Data Cabling Service", "labour", 2.0, 110),
        ("Electrical Components", "materials", 1, 120),
        ("Testing & Compliance", "other", 1, 85),
    ]


@pytest.mark.parametrize(
    "subcategory, description, name, cost",
    [
        ("auto_electrician", "dual battery setup in the cruiser", "Dual Battery System Kit", 750),
        ("fourwd_modifier", "fit a light bar", "LED Light Bar & Wiring Kit", 320),
        ("fencer", "replace colorbond fence", "Fencing Materials", 450),
        ("landscaper", "new garden beds", "Plants & Garden Materials", 250),
        ("concreter", "pour a new slab", "Concrete & Materials", 380),
        ("interior_painter", "paint the lounge", "Paint & Materials", 180),
        ("carpenter", "build a deck", "Decking Materials & Hardware", 450),
        ("maintenance_plumber", "install new toilet", "Toilet Suite & Installation Kit", 320),
    ],
)
def test_materials_bundles(subcategory, description, name, cost):
    items = generate_items(description, DEFAULT_CATALOG.get(subcategory))
    assert (items[1].name, items[1].cost) == (name, cost)


def test_caller_rate_overrides_trade_default(electrician):
    items = generate_items("upgrade the switchboard", electrician, 150)
    assert items[0].cost == 150


@pytest.mark.parametrize("rate", [None, 0, -40, math.nan, math.inf])
def test_unusable_rate_falls_back_to_trade_default(electrician, rate):
    items = generate_items("upgrade the switchboard", electrician, rate)
    assert items[0].cost == electrician.default_hourly_rate


def test_every_item_is_positive(electrician):
    for item in generate_items("install 4 double power points", electrician):
        assert item.qty > 0
        assert item.cost > 0


def test_fallback_bundle():
    items = generate_fallback_items()
    assert _summary(items) == [
        ("Professional Service", "labour", 2, 120),
        ("Materials & Supplies", "materials", 1, 60),
        ("Service Call-Out", "other", 1, 65),
    ]
    assert [i.unit for i in items] == [UnitKind.HOURS, UnitKind.EACH, UnitKind.FIXED]


def test_fallback_bundle_uses_caller_rate():
    assert generate_fallback_items(95)[0].cost == 95
    assert generate_fallback_items(-1)[0].cost == 120
