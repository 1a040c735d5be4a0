import json

import pytest

from jobquote.services.catalog import DEFAULT_CATALOG, TradeCatalog, TradeCategory, load_catalog
from jobquote.services.classifier import classify


def test_builtin_catalog():
    assert len(DEFAULT_CATALOG) == 29
    assert DEFAULT_CATALOG.categories[0].subcategory == "residential_electrician"
    for trade in DEFAULT_CATALOG:
        assert trade.keywords
        assert trade.default_hourly_rate > 0


def test_lookup_by_subcategory():
    assert DEFAULT_CATALOG.get("gas_fitter").category == "plumbing"
    assert DEFAULT_CATALOG.get("astronaut") is None


def test_trade_needs_keywords():
    with pytest.raises(ValueError):
        TradeCategory("test", "nothing", (), 100)


@pytest.mark.parametrize("rate", [0, -10])
def test_trade_needs_positive_rate(rate):
    with pytest.raises(ValueError):
        TradeCategory("test", "cheap", ("cheap",), rate)


def test_catalog_cannot_be_empty():
    with pytest.raises(ValueError):
        TradeCatalog(())


def test_trades_are_immutable():
    trade = DEFAULT_CATALOG.get("carpenter")
    with pytest.raises(AttributeError):
        trade.default_hourly_rate = 1


def test_load_builtin_when_no_path():
    assert load_catalog("") is DEFAULT_CATALOG


def test_load_from_json(tmp_path):
    path = tmp_path / "trades.json"
    path.write_text(json.dumps([
        {
            "category": "pool",
            "subcategory": "pool_technician",
            "keywords": ["pool", "chlorinator", "pool pump"],
            "default_hourly_rate": 95,
            "compliance": "AS 1926 pool safety",
        },
    ]))

    catalog = load_catalog(str(path))
    assert len(catalog) == 1
    trade = classify("replace the pool pump", catalog)
    assert trade.display_name == "Pool Technician"
    assert trade.compliance == "AS 1926 pool safety"


def test_load_rejects_non_list(tmp_path):
    path = tmp_path / "trades.json"
    path.write_text(json.dumps({"category": "pool"}))
    with pytest.raises(ValueError):
        load_catalog(str(path))


def test_load_rejects_invalid_trade(tmp_path):
    path = tmp_path / "trades.json"
    path.write_text(json.dumps([
        {"category": "pool", "subcategory": "pool", "keywords": [], "default_hourly_rate": 95},
    ]))
    with pytest.raises(ValueError):
        load_catalog(str(path))
