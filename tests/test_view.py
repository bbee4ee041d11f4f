"""Tests for text rendering."""

import random
from datetime import datetime
from unittest.mock import patch

import pytest

from geminipulse.chart import ChartSeries, advance_series, seed_series
from geminipulse.dashboard import Dashboard
from geminipulse.models import (
    AnalysisFailed,
    AnalysisIdle,
    AnalysisLoading,
    AnalysisResult,
    AnalysisSucceeded,
    Citation,
    Ticker,
)
from geminipulse.pricing import SEED_VOLATILITY, RandomWalk
from geminipulse.view import (
    IDLE_HINT,
    SPARK_CHARS,
    render_analysis,
    render_chart,
    render_dashboard,
    render_header,
    render_selection,
    render_watchlist,
    source_label,
    sparkline,
)


class FixedStep:
    """Price model that always moves by the same amount."""

    def __init__(self, step: float) -> None:
        self.step = step

    def next_price(self, previous: float) -> float:
        return previous + self.step


class TestRenderWatchlist:
    def test_marks_selected_row(self):
        tickers = [
            Ticker.create("NVDA", "NVIDIA Corp", 890.50, 12.40),
            Ticker.create("AAPL", "Apple Inc.", 172.75, -0.85),
        ]
        lines = render_watchlist(tickers, "AAPL")

        assert lines[0] == "WATCHLIST"
        assert lines[1].startswith("  NVDA")
        assert "+1.41%" in lines[1]
        assert lines[2].startswith("> AAPL")
        assert "$172.75" in lines[2]
        assert "-0.49%" in lines[2]


class TestRenderSelection:
    @pytest.mark.parametrize(
        "change,arrow",
        [(12.40, "↑"), (-3.20, "↓"), (0.0, "↑")],
    )
    def test_arrow_direction(self, change, arrow):
        ticker = Ticker.create("TSLA", "Tesla Inc.", 175.30, change)
        assert f"{arrow} {abs(change):.2f}" in render_selection(ticker)


class TestSparkline:
    def test_empty(self):
        assert sparkline([]) == ""

    def test_flat(self):
        assert sparkline([1.0, 1.0, 1.0]) == SPARK_CHARS[4] * 3

    def test_extremes(self):
        line = sparkline([1.0, 2.0, 3.0])
        assert line[0] == SPARK_CHARS[0]
        assert line[-1] == SPARK_CHARS[-1]

    def test_width_limit(self):
        assert len(sparkline([float(i) for i in range(100)], width=10)) == 10


class TestRenderChart:
    def test_no_data(self):
        assert render_chart(None)[1] == "(no data)"
        assert render_chart(ChartSeries(symbol="NVDA"))[1] == "(no data)"

    def test_seeded(self, rng):
        series = seed_series(
            "NVDA", 890.50, now=datetime(2024, 12, 2, 14, 30), walk=RandomWalk(SEED_VOLATILITY, rng)
        )
        lines = render_chart(series)

        assert lines[0].startswith("LIVE PERFORMANCE")
        assert len(lines[1]) == 50
        assert lines[2].startswith("13:40")
        assert lines[2].endswith("14:29")

    @pytest.mark.parametrize("is_positive,label", [(True, "up"), (False, "down")])
    def test_trend_label_follows_ticker_change(self, rng, is_positive, label):
        series = seed_series(
            "NVDA", 890.50, now=datetime(2024, 12, 2, 14, 30), walk=RandomWalk(SEED_VOLATILITY, rng)
        )
        assert render_chart(series, is_positive)[0] == f"LIVE PERFORMANCE ({label})"


class TestRenderAnalysis:
    """Test cases for render_analysis."""

    def test_idle(self):
        assert render_analysis(AnalysisIdle())[1] == IDLE_HINT

    def test_loading(self):
        assert "AAPL" in render_analysis(AnalysisLoading(symbol="AAPL", generation=1))[1]

    def test_failed(self):
        state = AnalysisFailed(symbol="AAPL", message="Try later.")
        assert render_analysis(state)[1] == "Try later."

    def test_succeeded_lists_only_linked_sources(self):
        result = AnalysisResult(
            text="Bullish on strong demand.",
            sources=(
                Citation(uri="https://news.example.com/a", title="Headline"),
                Citation(uri="https://www.example.org/b"),
                Citation(title="No link"),
            ),
        )
        lines = render_analysis(AnalysisSucceeded(symbol="AAPL", result=result))

        assert "Bullish on strong demand." in lines
        assert "Sources & Real-time Data:" in lines
        assert "  - Headline <https://news.example.com/a>" in lines
        assert "  - www.example.org <https://www.example.org/b>" in lines
        assert not any("No link" in line for line in lines)

    def test_succeeded_without_sources(self):
        lines = render_analysis(
            AnalysisSucceeded(symbol="AAPL", result=AnalysisResult(text="Flat."))
        )
        assert "Sources & Real-time Data:" not in lines


class TestSourceLabel:
    def test_title_preferred(self):
        assert source_label(Citation(uri="https://a.example", title="A")) == "A"

    def test_hostname_fallback(self):
        assert source_label(Citation(uri="https://a.example/path")) == "a.example"


class TestRenderDashboard:
    def test_header_badge(self):
        assert render_header("OPEN").endswith("[MARKET OPEN]")

    @patch("geminipulse.view.market_status", return_value="CLOSED")
    def test_full_render(self, mock_status, test_settings):
        dashboard = Dashboard(test_settings, rng=random.Random(1))

        text = render_dashboard(dashboard)

        assert "[MARKET CLOSED]" in text
        assert "WATCHLIST" in text
        assert "NVDA  NVIDIA Corp" in text
        assert IDLE_HINT in text

    @patch("geminipulse.view.market_status", return_value="OPEN")
    def test_chart_trend_uses_selected_ticker(self, mock_status, test_settings, rng):
        """✅ A falling chart still reads "up" while the ticker is above its open."""
        dashboard = Dashboard(test_settings, rng=random.Random(1))
        series = seed_series(
            "NVDA", 890.50, now=datetime(2024, 12, 2, 14, 30), walk=RandomWalk(SEED_VOLATILITY, rng)
        )
        dashboard.chart = advance_series(series, FixedStep(-500.0))

        text = render_dashboard(dashboard)

        assert dashboard.current_ticker.change > 0
        assert "LIVE PERFORMANCE (up)" in text
