"""
Current attendance cycle of a group, prefilled from existing records.

Schedule -> class-day resolution -> week cycle -> records in [start, end) ->
one status row per active enrollment.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from groups.services import get_active_enrollments, get_group_for_center, get_group_schedule
from attendance.exceptions import InvalidConfiguration
from attendance.models import AttendanceRecord
from .class_day import resolve
from .week_cycle import as_calendar_day, current_week_cycle, local_today, weekday_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupAttendanceStatus:
    student_id: int
    enrollment_id: int
    first_name: str
    last_name: str
    current_week_status: Optional[str]
    has_attendance_today: bool
    last_attendance_date: Optional[date]


@dataclass(frozen=True)
class WeekCycleAttendance:
    group_id: int
    start_date: date
    end_date: date
    is_class_today: bool
    anchor_weekday: str
    attendance_exists: bool
    attendance_date: Optional[date]
    students: tuple


@dataclass(frozen=True)
class ClassToday:
    is_class_today: bool
    class_days: tuple
    today: str
    date: date


def current_cycle_view(group_id, center_id=None, today=None, policy=None):
    """
    Build the WeekCycleAttendance for the group as of `today` (default: local calendar day).

    attendance_exists / attendance_date look at today's date on a class day,
    otherwise at the anchor weekday's most recent occurrence.
    Raises NotFound (group) or InvalidConfiguration (no schedule).
    """
    group = get_group_for_center(group_id, center_id)
    schedule = get_group_schedule(group)
    if not schedule:
        raise InvalidConfiguration(f"Group {group.id} has no schedules defined")

    today = as_calendar_day(today) if today is not None else local_today()
    resolution = resolve([entry.day for entry in schedule], today, policy=policy)
    cycle = current_week_cycle(resolution.anchor_weekday, today)
    target_date = today if resolution.is_class_today else cycle.start_date

    records = list(
        AttendanceRecord.objects.filter(
            enrollment__group=group,
            date__gte=cycle.start_date,
            date__lt=cycle.end_date,
        ).order_by('-date', '-updated_at')
    )

    latest_by_enrollment = {}
    for record in records:
        latest_by_enrollment.setdefault(record.enrollment_id, record)
    recorded_today = {r.enrollment_id for r in records if r.date == today}
    attendance_exists = any(r.date == target_date for r in records)

    students = []
    for enrollment in get_active_enrollments(group):
        latest = latest_by_enrollment.get(enrollment.id)
        students.append(GroupAttendanceStatus(
            student_id=enrollment.student_id,
            enrollment_id=enrollment.id,
            first_name=enrollment.student.first_name,
            last_name=enrollment.student.last_name,
            current_week_status=latest.status if latest else None,
            has_attendance_today=resolution.is_class_today and enrollment.id in recorded_today,
            last_attendance_date=latest.date if latest else None,
        ))

    logger.debug(
        'Cycle view group=%s anchor=%s cycle=[%s, %s) records=%s students=%s',
        group.id, resolution.anchor_weekday, cycle.start_date, cycle.end_date, len(records), len(students),
    )
    return WeekCycleAttendance(
        group_id=group.id,
        start_date=cycle.start_date,
        end_date=cycle.end_date,
        is_class_today=resolution.is_class_today,
        anchor_weekday=resolution.anchor_weekday,
        attendance_exists=attendance_exists,
        attendance_date=target_date if attendance_exists else None,
        students=tuple(students),
    )


def class_today(group_id, center_id=None, today=None):
    """Whether the group meets today. A group without schedule simply never meets."""
    group = get_group_for_center(group_id, center_id)
    today = as_calendar_day(today) if today is not None else local_today()
    class_days = [entry.day for entry in get_group_schedule(group)]
    if class_days:
        resolution = resolve(class_days, today)
        is_class_today, class_days = resolution.is_class_today, resolution.class_days
    else:
        is_class_today = False
    return ClassToday(
        is_class_today=is_class_today,
        class_days=tuple(class_days),
        today=weekday_name(today),
        date=today,
    )
