"""
Week cycle arithmetic on calendar days.

A cycle is the half-open 7-day window [start_date, end_date) where start_date is
the most recent occurrence (today included) of the anchor weekday. Everything
here works on datetime.date; datetimes are truncated to their local calendar day.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from django.utils import timezone

from core.weekdays import WEEKDAY_NAMES
from attendance.exceptions import InvalidConfiguration

CYCLE_LENGTH = timedelta(days=7)


@dataclass(frozen=True)
class WeekCycle:
    start_date: date
    end_date: date

    def __contains__(self, day):
        return self.start_date <= as_calendar_day(day) < self.end_date


def as_calendar_day(value):
    """Reduce a date/datetime to the calendar day it falls on (local time for aware datetimes)."""
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def local_today():
    """Wall-clock calendar day in settings.TIME_ZONE."""
    return timezone.localdate()


def parse_weekday(name):
    """Weekday name -> index (Monday=0). Raises InvalidConfiguration for unknown names."""
    try:
        return WEEKDAY_NAMES.index(name)
    except ValueError:
        raise InvalidConfiguration(f"Invalid day name: {name!r}")


def weekday_name(day):
    return WEEKDAY_NAMES[as_calendar_day(day).weekday()]


def current_week_cycle(anchor_weekday, today):
    anchor_index = parse_weekday(anchor_weekday)
    today = as_calendar_day(today)
    delta = (today.weekday() - anchor_index) % 7
    start_date = today - timedelta(days=delta)
    return WeekCycle(start_date=start_date, end_date=start_date + CYCLE_LENGTH)


def most_recent_occurrence(anchor_weekday, today):
    """Latest date on or before today that falls on anchor_weekday."""
    return current_week_cycle(anchor_weekday, today).start_date


def is_date_in_cycle(day, anchor_weekday, today):
    return day in current_week_cycle(anchor_weekday, today)


def is_same_calendar_day(d1, d2):
    return as_calendar_day(d1) == as_calendar_day(d2)


def to_date_key(day):
    """Stable YYYY-MM-DD key."""
    return as_calendar_day(day).isoformat()
