"""Countdown calculator — pure business logic.

Months/days left until the target date, using 30-day months. The
approximation is what the status and reminder messages have always shown.

Days are counted from `now` to midnight of the target date and truncated,
so from 00:01 onwards today no longer counts as a whole day.

Negative countdowns (target passed) truncate months toward zero instead of
flooring them: -35 days is (-1, -5), not the floor-division (-2, -5).

No I/O: this module only transforms dates.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time

_DAYS_PER_MONTH = 30
_SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class TimeLeft:
    """Remaining time, split into 30-day months and leftover days."""

    months: int
    days: int

    @property
    def total_days(self) -> int:
        return self.months * _DAYS_PER_MONTH + self.days

    @property
    def is_past(self) -> bool:
        return self.total_days < 0


def days_between(target: date, now: date | datetime) -> int:
    """Whole days from `now` to midnight of `target`, truncated toward zero.

    Negative once the target has passed. A plain date for `now` is taken
    as its midnight.
    """
    if not isinstance(now, datetime):
        return (target - now).days

    # Same tzinfo on both sides → wall-clock difference, so DST shifts
    # don't nudge the count
    target_dt = datetime.combine(target, time(), tzinfo=now.tzinfo)
    return int((target_dt - now).total_seconds() / _SECONDS_PER_DAY)


def time_left(target: date, now: date | datetime) -> TimeLeft:
    """Split the days until `target` into 30-day months and days.

    Both parts truncate toward zero, so after the target date has passed
    they share the sign of the total: -35 days → (-1, -5).
    """
    total = days_between(target, now)
    months = int(total / _DAYS_PER_MONTH)
    return TimeLeft(months=months, days=total - months * _DAYS_PER_MONTH)
