"""Dashboard host: owns the snapshots and applies simulator updates to them."""

import asyncio
import random

from geminipulse.analysis import AnalysisRequester
from geminipulse.chart import ChartSeries, advance_series, series_for_selection
from geminipulse.config import Settings, settings
from geminipulse.logging import logger
from geminipulse.models import AnalysisState, Ticker
from geminipulse.pricing import (
    LIVE_VOLATILITY,
    SEED_VOLATILITY,
    WATCHLIST_VOLATILITY,
    PriceModel,
    RandomWalk,
)
from geminipulse.scheduler import Scheduler
from geminipulse.utils import QuickStats, random_quick_stats
from geminipulse.watchlist import (
    find_ticker,
    normalize_symbol,
    search_ticker,
    seed_watchlist,
    tick_watchlist,
)


class Dashboard:
    """
    🖥️ Single-process dashboard state.

    The simulators are pure functions over snapshots; this class holds the
    current snapshots, swaps in the new ones on every tick, and owns the
    scheduler and the in-flight analysis task.

    Args:
        config: Settings to run with (default: the module-level settings)
        rng: Random source shared by every simulator, injectable for tests
        price_model: Source of live chart prices (default: random walk)
    """

    def __init__(
        self,
        config: Settings | None = None,
        rng: random.Random | None = None,
        price_model: PriceModel | None = None,
    ) -> None:
        self.config = config or settings
        self.rng = rng or random.Random()
        self.watchlist_walk = RandomWalk(WATCHLIST_VOLATILITY, self.rng)
        self.seed_walk = RandomWalk(SEED_VOLATILITY, self.rng)
        self.price_model = price_model or RandomWalk(LIVE_VOLATILITY, self.rng)

        self.tickers: list[Ticker] = seed_watchlist()
        self.selected_symbol: str | None = None
        self.chart: ChartSeries | None = None
        self.stats: QuickStats | None = None

        self.scheduler = Scheduler()
        self.analysis = AnalysisRequester(
            api_key=self.config.api_key,
            model=self.config.gemini_model,
            discard_stale=self.config.discard_stale_analysis,
        )
        self._analysis_tasks: set[asyncio.Task] = set()

    @property
    def current_ticker(self) -> Ticker:
        """The selected ticker, or the first watchlist entry if none matches."""
        if self.selected_symbol is not None:
            ticker = find_ticker(self.tickers, self.selected_symbol)
            if ticker is not None:
                return ticker
        return self.tickers[0]

    @property
    def analysis_state(self) -> AnalysisState:
        return self.analysis.state

    def start(self) -> None:
        """Register the simulator timers and select the default ticker, adding it if unknown."""
        self.scheduler.every(
            "watchlist", self.config.watchlist_interval, self.tick_watchlist
        )
        self.scheduler.every("chart", self.config.chart_interval, self.tick_chart)
        if self.search(self.config.default_symbol) is None:
            self.select(self.tickers[0].symbol)
        logger.info(
            "Dashboard started symbol={symbol} tasks={tasks}",
            symbol=self.selected_symbol,
            tasks=self.scheduler.names,
        )

    async def stop(self) -> None:
        """Cancel all timers and any analysis still in flight."""
        pending = list(self._analysis_tasks)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        await self.scheduler.shutdown()
        await self.analysis.close()
        logger.info("Dashboard stopped")

    def tick_watchlist(self) -> None:
        self.tickers = tick_watchlist(
            self.tickers, self.watchlist_walk, self.config.tick_probability
        )

    def tick_chart(self) -> None:
        if self.chart is not None:
            self.chart = advance_series(self.chart, self.price_model)

    def select(self, symbol: str) -> bool:
        """
        Select a ticker already in the watchlist.

        Re-selecting the current ticker changes nothing. A new selection
        re-seeds the chart and starts one analysis request.

        Returns:
            True if the selection changed
        """
        symbol = normalize_symbol(symbol)
        if symbol == self.selected_symbol:
            return False
        if find_ticker(self.tickers, symbol) is None:
            logger.warning("Ignoring unknown symbol={symbol}", symbol=symbol)
            return False

        self.selected_symbol = symbol
        ticker = self.current_ticker
        self.chart = series_for_selection(self.chart, ticker, walk=self.seed_walk)
        self.stats = random_quick_stats(self.rng)
        logger.info("Selected symbol={symbol}", symbol=symbol)

        # earlier requests keep running; the requester drops their stale results
        generation = self.analysis.begin(symbol)
        task = asyncio.get_running_loop().create_task(
            self.analysis.resolve(symbol, generation),
            name=f"geminipulse:analysis:{symbol}",
        )
        self._analysis_tasks.add(task)
        task.add_done_callback(self._analysis_tasks.discard)
        return True

    def search(self, query: str) -> str | None:
        """
        Select the ticker matching a free-text query, adding it if unknown.

        Returns:
            The selected symbol, or None for a blank query
        """
        self.tickers, symbol = search_ticker(self.tickers, query, self.rng)
        if symbol is not None:
            self.select(symbol)
        return symbol
