import sentry_sdk
from google import genai
from google.genai import types

from geminipulse.logging import struct_logger as logger
from geminipulse.models import (
    AnalysisFailed,
    AnalysisIdle,
    AnalysisLoading,
    AnalysisOutcome,
    AnalysisResult,
    AnalysisState,
    AnalysisSucceeded,
    Citation,
)

MISSING_KEY_MESSAGE = "API Key is missing. Please configure your environment variables."
NO_ANALYSIS_MESSAGE = "No analysis available."
FAILURE_MESSAGE = "Failed to fetch market analysis. Please try again later."

PROMPT_TEMPLATE = (
    "Give me a concise, real-time market analysis for {symbol}. "
    "Include the current price if available, recent news, and a brief outlook "
    "(Bullish/Bearish). Keep it under 150 words. Focus on why it is moving today."
)


def build_prompt(symbol: str) -> str:
    return PROMPT_TEMPLATE.format(symbol=symbol)


def extract_citations(response: types.GenerateContentResponse) -> tuple[Citation, ...]:
    """
    🔗 Pull web grounding sources out of a Gemini response.

    Args:
        response: Raw response from generate_content

    Returns:
        Citations in the order Gemini returned them (empty if not grounded)
    """
    if not response.candidates:
        return ()

    metadata = response.candidates[0].grounding_metadata
    if metadata is None or not metadata.grounding_chunks:
        return ()

    citations = []
    for chunk in metadata.grounding_chunks:
        web = chunk.web
        citations.append(
            Citation(
                uri=web.uri if web else None,
                title=web.title if web else None,
            )
        )
    return tuple(citations)


async def close_client(client: genai.Client) -> None:
    """Close the async HTTP session behind a Gemini client."""
    try:
        await client.aio.aclose()
    except Exception as e:
        logger.warning("Failed to close Gemini client", error=str(e))


async def get_market_analysis(
    symbol: str,
    api_key: str,
    model: str = "gemini-2.5-flash",
    client: genai.Client | None = None,
) -> AnalysisOutcome:
    """
    🤖 Ask Gemini for a short, search-grounded market commentary.

    Errors never escape this function: every failure becomes an
    AnalysisFailed carrying a user-facing message.

    Args:
        symbol: Ticker symbol (e.g., "AAPL")
        api_key: Gemini API key; empty short-circuits without a network call
        model: Gemini model name
        client: Shared Gemini client; when omitted a client is created for
            this call and closed afterwards

    Returns:
        AnalysisSucceeded with text and sources, or AnalysisFailed
    """
    if not api_key:
        logger.warning("Gemini API key not configured", symbol=symbol)
        return AnalysisSucceeded(
            symbol=symbol, result=AnalysisResult(text=MISSING_KEY_MESSAGE)
        )

    logger.info("Requesting market analysis", symbol=symbol, model=model)
    sentry_sdk.add_breadcrumb(
        category="analysis",
        message="Requesting Gemini market analysis",
        level="info",
        data={"symbol": symbol, "model": model},
    )

    owned = client is None
    try:
        if client is None:
            client = genai.Client(api_key=api_key)
        response = await client.aio.models.generate_content(
            model=model,
            contents=build_prompt(symbol),
            config=types.GenerateContentConfig(
                tools=[types.Tool(google_search=types.GoogleSearch())],
            ),
        )
        text = response.text or NO_ANALYSIS_MESSAGE
        sources = extract_citations(response)
    except Exception as e:
        logger.error("Gemini API error", symbol=symbol, error=str(e))
        sentry_sdk.capture_exception(e)
        return AnalysisFailed(symbol=symbol, message=FAILURE_MESSAGE)
    finally:
        if owned and client is not None:
            await close_client(client)

    logger.info("Market analysis received", symbol=symbol, sources=len(sources))
    return AnalysisSucceeded(
        symbol=symbol, result=AnalysisResult(text=text, sources=sources)
    )


class AnalysisRequester:
    """
    🧭 Tracks the analysis panel state across ticker selections.

    Every request gets a new generation number. When `discard_stale` is set,
    a response that arrives after a newer request has started is dropped so
    it cannot overwrite the panel for a different ticker.

    One Gemini client is created on the first request and reused until
    `close()`.
    """

    def __init__(
        self, api_key: str, model: str = "gemini-2.5-flash", discard_stale: bool = True
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.discard_stale = discard_stale
        self.state: AnalysisState = AnalysisIdle()
        self.generation = 0
        self._client: genai.Client | None = None

    def begin(self, symbol: str) -> int:
        """Enter the loading state for `symbol`, clearing any previous result."""
        self.generation += 1
        self.state = AnalysisLoading(symbol=symbol, generation=self.generation)
        return self.generation

    async def resolve(self, symbol: str, generation: int) -> AnalysisOutcome:
        """
        Run the remote call for a request started with `begin()` and apply it.

        Returns:
            The outcome of this request, whether or not it was applied
        """
        if self.api_key and self._client is None:
            try:
                self._client = genai.Client(api_key=self.api_key)
            except Exception as e:
                # get_market_analysis retries construction and reports the failure
                logger.error("Failed to create Gemini client", error=str(e))

        outcome = await get_market_analysis(
            symbol, self.api_key, self.model, client=self._client
        )

        if self.discard_stale and generation != self.generation:
            logger.info(
                "Discarding stale analysis",
                symbol=symbol,
                generation=generation,
                latest=self.generation,
            )
            return outcome

        self.state = outcome
        return outcome

    async def request(self, symbol: str) -> AnalysisOutcome:
        """Fetch analysis for `symbol`, moving through loading to a final state."""
        return await self.resolve(symbol, self.begin(symbol))

    async def close(self) -> None:
        if self._client is not None:
            client, self._client = self._client, None
            await close_client(client)
