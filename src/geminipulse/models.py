"""Data models for geminipulse."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Ticker(BaseModel):
    """
    📊 A watchlist entry with its latest simulated price figures.

    The session reference price is stored explicitly in `open_price` so the
    percent change never has to be back-computed from `price - change`.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., description="Upper-case ticker symbol (e.g., 'AAPL')")
    name: str = Field(..., description="Display name (e.g., 'Apple Inc.')")
    price: float = Field(..., description="Last simulated price")
    change: float = Field(0.0, description="Absolute change since open_price")
    change_percent: float = Field(0.0, description="Percent change since open_price")
    open_price: float = Field(..., description="Session reference price")

    @classmethod
    def create(
        cls, symbol: str, name: str, price: float, change: float = 0.0
    ) -> "Ticker":
        """Build a ticker whose reference price is derived once from price and change."""
        open_price = price - change
        return cls(
            symbol=symbol.upper(),
            name=name,
            price=price,
            change=change,
            change_percent=percent_of(change, open_price),
            open_price=open_price,
        )

    @property
    def is_positive(self) -> bool:
        return self.change >= 0


def percent_of(change: float, reference: float) -> float:
    if reference == 0:
        return 0.0
    return change / reference * 100


class ChartPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    at: datetime = Field(..., description="Point timestamp")
    time: str = Field(..., description="Display label for the timestamp")
    value: float = Field(..., description="Price rounded to two decimals")


class Citation(BaseModel):
    """🔗 A grounding source returned alongside generated text."""

    model_config = ConfigDict(frozen=True)

    uri: str | None = None
    title: str | None = None


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    sources: tuple[Citation, ...] = ()


class AnalysisIdle(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["idle"] = "idle"


class AnalysisLoading(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["loading"] = "loading"
    symbol: str
    generation: int


class AnalysisSucceeded(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["succeeded"] = "succeeded"
    symbol: str
    result: AnalysisResult

    @property
    def text(self) -> str:
        return self.result.text

    @property
    def sources(self) -> tuple[Citation, ...]:
        return self.result.sources


class AnalysisFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["failed"] = "failed"
    symbol: str
    message: str


AnalysisOutcome = AnalysisSucceeded | AnalysisFailed

AnalysisState = Annotated[
    AnalysisIdle | AnalysisLoading | AnalysisSucceeded | AnalysisFailed,
    Field(discriminator="kind"),
]
