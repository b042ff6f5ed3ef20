"""Human-relative time descriptions ("3 days ago", "in an hour").

Thresholds follow the conventions users already see in the graph manager UI:
values are rounded half-up and bucketed from seconds up to years.
"""

from __future__ import annotations

import math
from datetime import datetime

_SECONDS_PER_DAY = 86_400
# Average month length in days over the 400-year Gregorian cycle.
_DAYS_PER_MONTH = 146_097 / 4_800


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def to_local(moment: datetime) -> datetime:
    """Attach/convert to the local time zone; naive values are read as local time."""

    return moment.astimezone()


def _describe(seconds_total: float) -> str:
    seconds = _round_half_up(seconds_total)
    minutes = _round_half_up(seconds_total / 60)
    hours = _round_half_up(seconds_total / 3_600)
    days_exact = seconds_total / _SECONDS_PER_DAY
    days = _round_half_up(days_exact)
    months = _round_half_up(days_exact / _DAYS_PER_MONTH)
    years = _round_half_up(days_exact / _DAYS_PER_MONTH / 12)

    if seconds < 45:
        return "a few seconds"
    if minutes <= 1:
        return "a minute"
    if minutes < 45:
        return f"{minutes} minutes"
    if hours <= 1:
        return "an hour"
    if hours < 22:
        return f"{hours} hours"
    if days <= 1:
        return "a day"
    if days < 26:
        return f"{days} days"
    if months <= 1:
        return "a month"
    if months < 11:
        return f"{months} months"
    if years <= 1:
        return "a year"
    return f"{years} years"


def humanize_relative(moment: datetime, reference: datetime) -> str:
    """Describe `moment` relative to `reference`, e.g. ``"3 days ago"``."""

    delta = (to_local(moment) - to_local(reference)).total_seconds()
    text = _describe(abs(delta))
    if delta > 0:
        return f"in {text}"
    return f"{text} ago"
