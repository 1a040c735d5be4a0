import pytest

from jobquote.services.catalog import DEFAULT_CATALOG, TradeCatalog, TradeCategory
from jobquote.services.classifier import classify, rank_trades, score_trade


def _trade(subcategory, keywords, category="test"):
    return TradeCategory(category, subcategory, tuple(keywords), 100)


def test_power_points_classify_as_residential_electrician():
    trade = classify("install 4 double power points")
    assert trade.subcategory == "residential_electrician"
    assert trade.category == "electrical"


def test_electrician_wins_tie_with_handyman_on_catalog_order():
    ranked = rank_trades("install 4 double power points")
    top_two = {s.trade.subcategory: s.score for s in ranked[:2]}
    assert top_two == {"residential_electrician": 3, "general_handyman": 3}
    assert ranked[0].trade.subcategory == "residential_electrician"


def test_leaky_tap_is_plumbing():
    trade = classify("fix a leaky tap")
    assert trade.subcategory == "maintenance_plumber"
    score = score_trade(trade, "fix a leaky tap")
    # "leak" is a substring of "leaky" only; "tap" is a whole word
    assert (score.match_count, score.exact_matches, score.score) == (2, 1, 4)


def test_no_keyword_returns_none():
    assert classify("please help me with my project") is None


def test_empty_description_returns_none():
    assert classify("") is None
    assert classify("   ") is None


def test_matching_is_case_insensitive():
    assert classify("INSTALL 4 DOUBLE POWER POINTS").subcategory == "residential_electrician"


def test_whole_word_match_outranks_higher_substring_score():
    substrings = _trade("substrings", ["garag", "gara", "gar", "ga"])
    whole_word = _trade("whole_word", ["garages"])
    catalog = TradeCatalog((substrings, whole_word))

    ranked = rank_trades("garages", catalog)
    assert ranked[0].trade is whole_word
    assert ranked[0].score < ranked[1].score
    assert classify("garages", catalog) is whole_word


def test_tie_broken_by_catalog_order():
    first = _trade("first", ["deck"])
    second = _trade("second", ["deck"])
    assert classify("build a deck", TradeCatalog((first, second))) is first
    assert classify("build a deck", TradeCatalog((second, first))) is second


def test_exact_match_at_text_edges():
    trade = _trade("roof", ["roof"])
    assert score_trade(trade, "roof").exact_matches == 1
    assert score_trade(trade, "roof leaking").exact_matches == 1
    assert score_trade(trade, "leaking roof").exact_matches == 1
    assert score_trade(trade, "roofing").exact_matches == 0
    assert score_trade(trade, "roofing").match_count == 1


def test_multi_word_keyword():
    trade = classify("replace electric hot water heater")
    assert trade.subcategory == "hot_water_installer"
    assert score_trade(trade, "replace electric hot water heater").exact_matches == 3


def test_rank_covers_whole_catalog():
    assert len(rank_trades("anything at all")) == len(DEFAULT_CATALOG)


def test_trailing_newline_is_not_a_word_boundary():
    trade = _trade("roof", ["roof"])
    assert score_trade(trade, "roof\n").exact_matches == 0
    assert score_trade(trade, "fix the roof\n").exact_matches == 0
    assert score_trade(trade, "fix the roof\n").match_count == 1


@pytest.mark.parametrize(
    "description, shuffled",
    [
        ("fix a leaky tap", "tap leaky fix a"),
        ("install 4 double power points", "points power double 4 install"),
        ("install 4 double power points", "4 power points double install"),
    ],
)
def test_word_order_does_not_change_trade(description, shuffled):
    assert classify(shuffled).subcategory == classify(description).subcategory


def test_repeated_calls_return_same_trade():
    expected = classify("fix a leaky tap")
    for other in ["install 4 double power points", "", "paint the ceiling", "fix a leaky tap"]:
        classify(other)
        assert classify("fix a leaky tap") is expected
