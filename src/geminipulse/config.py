"""Configuration values for the geminipulse package."""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    api_key: str = Field(
        "",
        description="Gemini API key (empty disables market analysis)",
        validation_alias=AliasChoices("api_key", "gemini_api_key"),
    )
    gemini_model: str = Field("gemini-2.5-flash", description="Gemini model name")

    default_symbol: str = Field("NVDA", description="Ticker selected at startup")

    watchlist_interval: float = Field(
        1.5, gt=0, description="Seconds between watchlist ticks"
    )
    chart_interval: float = Field(1.0, gt=0, description="Seconds between chart ticks")
    render_interval: float = Field(1.0, gt=0, description="Seconds between redraws")
    tick_probability: float = Field(
        0.4, ge=0, le=1, description="Chance a ticker moves on a watchlist tick"
    )

    discard_stale_analysis: bool = Field(
        True,
        description="Drop analysis responses superseded by a newer selection",
    )

    log_level: str = Field("INFO", description="Log level")

    sentry_dsn: str | None = Field(None, description="Sentry DSN")
    sentry_environment: str = Field("production", description="Sentry environment")
    sentry_traces_sample_rate: float = Field(
        0.0, description="Sentry traces sample rate"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level


settings = Settings()
