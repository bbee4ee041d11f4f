"""Simulated watchlist: seed data, random ticks and symbol search."""

import random

from geminipulse.logging import logger
from geminipulse.models import Ticker, percent_of
from geminipulse.pricing import WATCHLIST_VOLATILITY, RandomWalk

SEARCH_RESULT_NAME = "Market Search"

_SEED = [
    ("NVDA", "NVIDIA Corp", 890.50, 12.40),
    ("AAPL", "Apple Inc.", 172.75, -0.85),
    ("MSFT", "Microsoft Corp", 420.10, 2.15),
    ("GOOGL", "Alphabet Inc.", 173.90, 1.20),
    ("TSLA", "Tesla Inc.", 175.30, -3.20),
    ("AMZN", "Amazon.com", 180.20, 0.90),
    ("META", "Meta Platforms", 495.60, 5.60),
    ("AMD", "Advanced Micro", 180.10, -1.50),
]


def seed_watchlist() -> list[Ticker]:
    """Build the startup watchlist."""
    return [Ticker.create(*row) for row in _SEED]


def perturb(ticker: Ticker, walk: RandomWalk) -> Ticker:
    """Move one ticker by a single random-walk step."""
    delta = walk.delta(ticker.price)
    change = ticker.change + delta
    return ticker.model_copy(
        update={
            "price": ticker.price + delta,
            "change": change,
            "change_percent": percent_of(change, ticker.open_price),
        }
    )


def tick_watchlist(
    tickers: list[Ticker],
    walk: RandomWalk | None = None,
    probability: float = 0.4,
) -> list[Ticker]:
    """
    ⏱️ Advance the watchlist by one tick.

    Each ticker moves independently with the given probability. Tickers that
    do not move are returned as the same objects.

    Args:
        tickers: Current watchlist snapshot
        walk: Random walk to draw steps from
        probability: Chance that any one ticker moves

    Returns:
        New watchlist snapshot in the same order
    """
    walk = walk or RandomWalk(WATCHLIST_VOLATILITY)
    return [perturb(t, walk) if walk.chance(probability) else t for t in tickers]


def normalize_symbol(query: str) -> str:
    return query.strip().upper()


def find_ticker(tickers: list[Ticker], symbol: str) -> Ticker | None:
    symbol = normalize_symbol(symbol)
    return next((t for t in tickers if t.symbol == symbol), None)


def search_ticker(
    tickers: list[Ticker], query: str, rng: random.Random | None = None
) -> tuple[list[Ticker], str | None]:
    """
    🔍 Resolve a free-text search to a watchlist symbol.

    Unknown symbols get a placeholder entry with a random price between 150
    and 250 and zero change, prepended to the watchlist.

    Args:
        tickers: Current watchlist snapshot
        query: Raw text typed by the user
        rng: Random source for the placeholder price

    Returns:
        (watchlist, symbol); symbol is None when the query is blank
    """
    symbol = normalize_symbol(query)
    if not symbol:
        return tickers, None

    if find_ticker(tickers, symbol) is not None:
        return tickers, symbol

    rng = rng or random.Random()
    ticker = Ticker.create(symbol, SEARCH_RESULT_NAME, 150.0 + rng.random() * 100)
    logger.info(
        "Added searched ticker symbol={symbol} price={price:.2f}",
        symbol=symbol,
        price=ticker.price,
    )
    return [ticker, *tickers], symbol
