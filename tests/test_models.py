"""Tests for data models."""

import pytest
from pydantic import TypeAdapter, ValidationError

from geminipulse.models import (
    AnalysisFailed,
    AnalysisIdle,
    AnalysisLoading,
    AnalysisResult,
    AnalysisState,
    AnalysisSucceeded,
    Citation,
    Ticker,
    percent_of,
)


class TestTicker:
    """Tests for the Ticker model."""

    def test_create_derives_open_price_and_percent(self) -> None:
        """✅ create() stores the reference price explicitly."""
        ticker = Ticker.create("nvda", "NVIDIA Corp", 890.50, 12.40)

        assert ticker.symbol == "NVDA"
        assert ticker.open_price == pytest.approx(878.10)
        assert ticker.change_percent == pytest.approx(1.41, abs=0.01)
        assert ticker.is_positive

    def test_create_without_change(self) -> None:
        """✅ A fresh ticker has zero change and zero percent."""
        ticker = Ticker.create("XYZ", "Market Search", 200.0)

        assert ticker.change == 0
        assert ticker.change_percent == 0
        assert ticker.open_price == 200.0

    def test_ticker_is_frozen(self) -> None:
        """❌ Tickers are immutable snapshots."""
        ticker = Ticker.create("AAPL", "Apple Inc.", 172.75, -0.85)
        with pytest.raises(ValidationError):
            ticker.price = 1.0

    def test_negative_change_is_not_positive(self) -> None:
        assert not Ticker.create("AAPL", "Apple Inc.", 172.75, -0.85).is_positive


class TestPercentOf:
    def test_percent(self) -> None:
        assert percent_of(5.0, 100.0) == 5.0

    def test_zero_reference(self) -> None:
        """✅ A zero reference price yields zero instead of dividing by zero."""
        assert percent_of(5.0, 0.0) == 0.0


class TestAnalysisState:
    """Tests for the tagged analysis state."""

    def test_succeeded_exposes_text_and_sources(self) -> None:
        result = AnalysisResult(
            text="Bullish.", sources=(Citation(uri="https://a.example", title="A"),)
        )
        state = AnalysisSucceeded(symbol="AAPL", result=result)

        assert state.kind == "succeeded"
        assert state.text == "Bullish."
        assert state.sources[0].title == "A"

    @pytest.mark.parametrize(
        "payload,expected",
        [
            ({"kind": "idle"}, AnalysisIdle),
            ({"kind": "loading", "symbol": "AAPL", "generation": 1}, AnalysisLoading),
            (
                {"kind": "succeeded", "symbol": "AAPL", "result": {"text": "ok"}},
                AnalysisSucceeded,
            ),
            ({"kind": "failed", "symbol": "AAPL", "message": "nope"}, AnalysisFailed),
        ],
    )
    def test_discriminated_union(self, payload, expected) -> None:
        """✅ The kind tag selects the state variant."""
        state = TypeAdapter(AnalysisState).validate_python(payload)
        assert isinstance(state, expected)

    def test_loading_cannot_carry_result(self) -> None:
        """✅ Loading has no result field, so a stale result cannot be attached."""
        assert "result" not in AnalysisLoading.model_fields

    def test_citation_fields_optional(self) -> None:
        citation = Citation()
        assert citation.uri is None
        assert citation.title is None
