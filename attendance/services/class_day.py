"""
Decide whether today is a class day for a schedule, and which scheduled weekday
anchors the current attendance cycle.

When today is not a class day a group with several weekly meetings has several
candidate anchors. The choice is an explicit policy (settings.ATTENDANCE_ANCHOR_POLICY):

- first_scheduled: first schedule entry in stored order
- nearest_past: the scheduled weekday that occurred most recently before today
"""
import logging
from dataclasses import dataclass

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from attendance.exceptions import InvalidConfiguration
from .week_cycle import as_calendar_day, most_recent_occurrence, parse_weekday, weekday_name

logger = logging.getLogger(__name__)

POLICY_FIRST_SCHEDULED = 'first_scheduled'
POLICY_NEAREST_PAST = 'nearest_past'


@dataclass(frozen=True)
class ClassDayResolution:
    is_class_today: bool
    anchor_weekday: str
    class_days: tuple


def _first_scheduled(class_days, today):
    return class_days[0]


def _nearest_past(class_days, today):
    # Distinct weekdays have distinct most recent occurrences.
    return max(class_days, key=lambda day: most_recent_occurrence(day, today))


ANCHOR_POLICIES = {
    POLICY_FIRST_SCHEDULED: _first_scheduled,
    POLICY_NEAREST_PAST: _nearest_past,
}


def get_anchor_policy(policy=None):
    name = policy or getattr(settings, 'ATTENDANCE_ANCHOR_POLICY', POLICY_FIRST_SCHEDULED)
    try:
        return ANCHOR_POLICIES[name]
    except KeyError:
        raise ImproperlyConfigured(
            f"Unknown ATTENDANCE_ANCHOR_POLICY {name!r}; expected one of {sorted(ANCHOR_POLICIES)}"
        )


def resolve(schedule_weekdays, today, policy=None):
    """
    schedule_weekdays: weekday names in stored order (duplicates allowed, first wins).
    Raises InvalidConfiguration for an empty schedule or unknown weekday names.
    """
    class_days = tuple(dict.fromkeys(schedule_weekdays))
    if not class_days:
        raise InvalidConfiguration('Group has no schedules defined')
    for day in class_days:
        parse_weekday(day)

    today = as_calendar_day(today)
    today_name = weekday_name(today)
    if today_name in class_days:
        return ClassDayResolution(True, today_name, class_days)

    choose = get_anchor_policy(policy)
    anchor = choose(class_days, today)
    logger.debug('Not a class day (%s); anchor=%s from %s', today_name, anchor, class_days)
    return ClassDayResolution(False, anchor, class_days)
