"""Trade classification engine.

Scores a free-text job description against every trade in the catalog
using keyword membership and returns the best match.
"""

import re
from typing import NamedTuple, Optional

from jobquote.services.catalog import DEFAULT_CATALOG, TradeCatalog, TradeCategory


class TradeScore(NamedTuple):
    trade: TradeCategory
    match_count: int
    exact_matches: int

    @property
    def score(self) -> int:
        # Whole-word hits count three times as much as bare substrings
        return self.match_count + 2 * self.exact_matches


def _is_exact(keyword: str, text: str) -> bool:
    """Keyword appears as a whole word, bounded by spaces or the text edges."""
    return re.search(rf"(?:\A| ){re.escape(keyword)}(?: |\Z)", text) is not None


def score_trade(trade: TradeCategory, description: str) -> TradeScore:
    text = description.lower()
    keywords = [kw.lower() for kw in trade.keywords]
    match_count = sum(1 for kw in keywords if kw in text)
    exact_matches = sum(1 for kw in keywords if _is_exact(kw, text))
    return TradeScore(trade, match_count, exact_matches)


def rank_trades(description: str, catalog: TradeCatalog = DEFAULT_CATALOG) -> list[TradeScore]:
    """All trades ordered best-first.

    Any trade with a whole-word match ranks above every trade without one;
    then higher score; then catalog order (the sort is stable).
    """
    scores = [score_trade(trade, description) for trade in catalog]
    scores.sort(key=lambda s: (s.exact_matches == 0, -s.score))
    return scores


def classify(description: str, catalog: TradeCatalog = DEFAULT_CATALOG) -> Optional[TradeCategory]:
    """Return the best-matching trade, or None when no keyword matches."""
    if not description:
        return None
    best = rank_trades(description, catalog)[0]
    return best.trade if best.score > 0 else None
