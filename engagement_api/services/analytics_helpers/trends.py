# /engagement_api/services/analytics_helpers/trends.py

import math
from datetime import datetime, timedelta
from typing import Tuple

from ...models.dashboard_model import Trend
from ..database_helpers.filters import DateRange

# Period-over-period change, in percent, that must be exceeded to leave "stable".
TREND_THRESHOLD_PCT = 5


def calculate_trend(current: float, previous: float) -> Trend:
    """
    Classifies the change from `previous` to `current`.

    A previous value of 0 is always "stable". Otherwise the relative change
    must be strictly greater than +5% for "up" or strictly less than -5% for
    "down".
    """
    if previous == 0:
        return Trend.STABLE
    change = ((current - previous) / previous) * 100
    if change > TREND_THRESHOLD_PCT:
        return Trend.UP
    if change < -TREND_THRESHOLD_PCT:
        return Trend.DOWN
    return Trend.STABLE


def round_half_up(value: float, places: int = 2) -> float:
    """Rounds to `places` decimals with halves going up, so 0.125 becomes 0.13."""
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def _days_before(moment: datetime, days: int) -> datetime:
    # Windows reaching past the calendar start are clamped to datetime.min.
    try:
        return moment - timedelta(days=days)
    except OverflowError:
        return datetime.min


def reporting_periods(now: datetime, days: int) -> Tuple[DateRange, DateRange]:
    """
    Returns the current window `[now - days, now]` and the preceding window
    of equal length `[now - 2*days, now - days)`. The two never overlap.
    A window too long for the calendar starts at `datetime.min`.
    """
    start = _days_before(now, days)
    previous_start = _days_before(start, days)
    current = DateRange(start=start, end=now)
    previous = DateRange(start=previous_start, end=start, include_end=False)
    return current, previous
