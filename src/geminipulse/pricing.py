"""Price models behind the simulated watchlist and chart."""

import random
from typing import Protocol

WATCHLIST_VOLATILITY = 0.0003
SEED_VOLATILITY = 0.002
LIVE_VOLATILITY = 0.0005


class PriceModel(Protocol):
    """
    🎭 Protocol for anything that can produce the next price of a series.

    The random walk below satisfies it; a real quote feed can be swapped in
    without touching the chart code.
    """

    def next_price(self, previous: float) -> float: ...


class RandomWalk:
    """
    🎲 Uniform random walk scaled by a volatility constant.

    Args:
        volatility: Fraction of the reference price bounding one step
        rng: Random source, injectable so tests can seed it
    """

    def __init__(self, volatility: float, rng: random.Random | None = None) -> None:
        self.volatility = volatility
        self.rng = rng or random.Random()

    def delta(self, reference: float) -> float:
        """Return a step in [-0.5, 0.5) * reference * volatility."""
        return (self.rng.random() - 0.5) * reference * self.volatility

    def next_price(self, previous: float) -> float:
        return previous + self.delta(previous)

    def chance(self, probability: float) -> bool:
        return self.rng.random() < probability
