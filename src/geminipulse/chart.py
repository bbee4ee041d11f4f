"""Simulated intraday chart: a fixed-length sliding window of price points."""

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict

from geminipulse.models import ChartPoint, Ticker
from geminipulse.pricing import LIVE_VOLATILITY, SEED_VOLATILITY, PriceModel, RandomWalk

CHART_LENGTH = 50
SEED_STEP = timedelta(minutes=1)


class ChartSeries(BaseModel):
    """📈 Chart points for one symbol, oldest first."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    points: tuple[ChartPoint, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    @property
    def last(self) -> float | None:
        return self.points[-1].value if self.points else None

    @property
    def low(self) -> float | None:
        return min(p.value for p in self.points) if self.points else None

    @property
    def high(self) -> float | None:
        return max(p.value for p in self.points) if self.points else None


def seed_series(
    symbol: str,
    base_price: float,
    now: datetime | None = None,
    walk: RandomWalk | None = None,
) -> ChartSeries:
    """
    Back-fill CHART_LENGTH one-minute points ending just before `now`.

    Every step is scaled by the base price, not by the running price.
    """
    now = now or datetime.now()
    walk = walk or RandomWalk(SEED_VOLATILITY)
    price = base_price
    points = []
    for i in range(CHART_LENGTH, 0, -1):
        at = now - i * SEED_STEP
        price += walk.delta(base_price)
        points.append(ChartPoint(at=at, time=at.strftime("%H:%M"), value=round(price, 2)))
    return ChartSeries(symbol=symbol, points=tuple(points))


def advance_series(
    series: ChartSeries,
    model: PriceModel | None = None,
    now: datetime | None = None,
) -> ChartSeries:
    """Append one live point computed from the last point and drop the oldest."""
    if not series.points:
        return series

    model = model or RandomWalk(LIVE_VOLATILITY)
    now = now or datetime.now()
    value = round(model.next_price(series.points[-1].value), 2)
    point = ChartPoint(at=now, time=now.strftime("%H:%M:%S"), value=value)
    return series.model_copy(update={"points": (*series.points[1:], point)})


def series_for_selection(
    current: ChartSeries | None,
    ticker: Ticker,
    now: datetime | None = None,
    walk: RandomWalk | None = None,
) -> ChartSeries:
    """Keep the current series unless the selected symbol changed."""
    if current is not None and current.symbol == ticker.symbol:
        return current
    return seed_series(ticker.symbol, ticker.price, now=now, walk=walk)
