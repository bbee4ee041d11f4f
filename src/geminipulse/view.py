"""Plain-text rendering of the dashboard."""

import textwrap
from datetime import datetime
from urllib.parse import urlparse

from geminipulse.chart import ChartSeries
from geminipulse.dashboard import Dashboard
from geminipulse.market import MarketStatus, market_status
from geminipulse.models import (
    AnalysisFailed,
    AnalysisLoading,
    AnalysisState,
    AnalysisSucceeded,
    Citation,
    Ticker,
)
from geminipulse.utils import QuickStats, format_number, format_percent, format_price

SPARK_CHARS = "▁▂▃▄▅▆▇█"
WIDTH = 72
IDLE_HINT = "Select a stock to generate AI analysis."
LOADING_HINT = "Analyzing {symbol}..."


def render_header(status: MarketStatus) -> str:
    title = "GeminiPulse · Market Intelligence"
    badge = f"[MARKET {status}]"
    return f"{title}{badge:>{WIDTH - len(title)}}"


def render_watchlist(tickers: list[Ticker], selected: str | None) -> list[str]:
    lines = ["WATCHLIST"]
    for ticker in tickers:
        marker = ">" if ticker.symbol == selected else " "
        lines.append(
            f"{marker} {ticker.symbol:<6} {ticker.name[:16]:<16} "
            f"{format_price(ticker.price):>12} {format_percent(ticker.change_percent):>8}"
        )
    return lines


def render_selection(ticker: Ticker) -> str:
    """Headline for the selected ticker, e.g. 'NVDA  NVIDIA Corp  $890.50  ↑ 12.40 (1.41%)'."""
    arrow = "↑" if ticker.is_positive else "↓"
    return (
        f"{ticker.symbol}  {ticker.name}  {format_price(ticker.price)}  "
        f"{arrow} {abs(ticker.change):.2f} ({abs(ticker.change_percent):.2f}%)"
    )


def sparkline(values: list[float], width: int = WIDTH) -> str:
    if not values:
        return ""
    values = values[-width:]
    low, high = min(values), max(values)
    span = high - low
    if span == 0:
        return SPARK_CHARS[len(SPARK_CHARS) // 2] * len(values)
    top = len(SPARK_CHARS) - 1
    return "".join(SPARK_CHARS[round((v - low) / span * top)] for v in values)


def render_chart(series: ChartSeries | None, is_positive: bool = True) -> list[str]:
    """Chart block; the trend label follows the ticker's change since open."""
    if series is None or not series.points:
        return ["LIVE PERFORMANCE", "(no data)"]

    trend = "up" if is_positive else "down"
    return [
        f"LIVE PERFORMANCE ({trend})",
        sparkline([p.value for p in series.points]),
        f"{series.points[0].time}  low {format_price(series.low)}  "
        f"high {format_price(series.high)}  last {format_price(series.last)}  "
        f"{series.points[-1].time}",
    ]


def render_stats(stats: QuickStats | None) -> str:
    if stats is None:
        return ""
    return (
        f"Volume {format_number(stats.volume)} (avg {format_number(stats.average_volume)})"
        f"  Market Cap {format_number(stats.market_cap)}  P/E {stats.pe_ratio:.1f}"
    )


def source_label(citation: Citation) -> str:
    """Citation title, falling back to the host name of its URI."""
    if citation.title:
        return citation.title
    return urlparse(citation.uri or "").hostname or citation.uri or ""


def render_analysis(state: AnalysisState) -> list[str]:
    lines = ["GEMINI MARKET INSIGHT"]
    if isinstance(state, AnalysisLoading):
        lines.append(LOADING_HINT.format(symbol=state.symbol))
    elif isinstance(state, AnalysisFailed):
        lines.append(state.message)
    elif isinstance(state, AnalysisSucceeded):
        lines.extend(textwrap.wrap(state.text, WIDTH) or [""])
        linked = [c for c in state.sources if c.uri]
        if linked:
            lines.append("Sources & Real-time Data:")
            lines.extend(f"  - {source_label(c)} <{c.uri}>" for c in linked)
    else:
        lines.append(IDLE_HINT)
    return lines


def render_dashboard(dashboard: Dashboard, now: datetime | None = None) -> str:
    """Render the full dashboard as one block of text."""
    rule = "─" * WIDTH
    sections = [
        [render_header(market_status(now))],
        render_watchlist(dashboard.tickers, dashboard.selected_symbol),
        [render_selection(dashboard.current_ticker), render_stats(dashboard.stats)],
        render_chart(dashboard.chart, dashboard.current_ticker.is_positive),
        render_analysis(dashboard.analysis_state),
    ]
    return f"\n{rule}\n".join("\n".join(section) for section in sections)
