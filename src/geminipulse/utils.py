import random

from pydantic import BaseModel, ConfigDict


def format_number(num: float | int | None) -> str:
    """Format large numbers with K, M, B, T suffixes"""
    if num is None:
        return "N/A"
    if num >= 1_000_000_000_000:
        return f"{num / 1_000_000_000_000:.1f}T"
    elif num >= 1_000_000_000:
        return f"{num / 1_000_000_000:.1f}B"
    elif num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    elif num >= 1_000:
        return f"{num / 1_000:.0f}K"
    else:
        return str(int(num))


def format_price(price: float | None) -> str:
    if price is None:
        return "--"
    return f"${price:,.2f}"


def format_percent(percent: float) -> str:
    """Signed percent, e.g. '+1.41%' or '-0.49%'."""
    sign = "+" if percent >= 0 else ""
    return f"{sign}{percent:.2f}%"


class QuickStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    volume: float
    average_volume: float
    market_cap: float
    pe_ratio: float


def random_quick_stats(rng: random.Random | None = None) -> QuickStats:
    """Placeholder volume, market cap and P/E figures for the selected ticker."""
    rng = rng or random.Random()
    return QuickStats(
        volume=(rng.random() * 50 + 10) * 1_000_000,
        average_volume=32_100_000,
        market_cap=(rng.random() * 2 + 0.5) * 1_000_000_000_000,
        pe_ratio=round(rng.random() * 40 + 15, 1),
    )
