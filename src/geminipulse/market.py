"""NYSE session status for the dashboard header."""

from datetime import date, datetime, timedelta
from functools import lru_cache
from typing import Literal

import pandas_market_calendars as mcal
import pytz

MarketStatus = Literal["OPEN", "PRE-MARKET", "AFTER HOURS", "CLOSED"]

NYC_TZ = pytz.timezone("America/New_York")
EXTENDED_HOURS = timedelta(hours=4)


def _normalize_to_nyc_timezone(check_time: datetime) -> datetime:
    """Convert a datetime to NYC timezone, handling both naive and timezone-aware datetimes."""
    if check_time.tzinfo is None:
        # If naive datetime, assume it's in NYC timezone
        return NYC_TZ.localize(check_time)
    return check_time.astimezone(NYC_TZ)


@lru_cache(maxsize=8)
def _get_market_schedule(target_date: date) -> tuple[datetime, datetime] | None:
    """
    Get market open and close times for a specific date.

    Returns:
        tuple[datetime, datetime] | None: (market_open, market_close) or None if market is closed
    """
    nyse = mcal.get_calendar("NYSE")
    schedule = nyse.schedule(start_date=target_date, end_date=target_date)

    if schedule.empty:
        return None

    market_open = schedule.iloc[0]["market_open"].to_pydatetime()
    market_close = schedule.iloc[0]["market_close"].to_pydatetime()
    return market_open, market_close


def market_status(
    check_time: datetime | None = None, extended: timedelta = EXTENDED_HOURS
) -> MarketStatus:
    """
    Classify a moment against the NYSE session.

    Args:
        check_time: Moment to check; naive datetimes are taken as NYC time (default: now)
        extended: Length of the pre-market and after-hours windows (default: 4 hours)

    Returns:
        "OPEN", "PRE-MARKET", "AFTER HOURS" or "CLOSED" (weekends and holidays)
    """
    nyc_time = _normalize_to_nyc_timezone(check_time or datetime.now(NYC_TZ))

    market_schedule = _get_market_schedule(nyc_time.date())
    if market_schedule is None:
        return "CLOSED"

    market_open, market_close = market_schedule

    if market_open <= nyc_time <= market_close:
        return "OPEN"
    if market_open - extended <= nyc_time < market_open:
        return "PRE-MARKET"
    if market_close < nyc_time <= market_close + extended:
        return "AFTER HOURS"
    return "CLOSED"
