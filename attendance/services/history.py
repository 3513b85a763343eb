"""
Attendance history lookups: by group, enrollment, student, single date and month.
Date bounds are inclusive.
"""
from calendar import monthrange
from dataclasses import dataclass
from datetime import date, timedelta

from rest_framework.exceptions import ValidationError

from groups.services import get_active_enrollments, get_group_for_center, get_group_schedule
from attendance.models import AttendanceRecord
from .week_cycle import weekday_name


@dataclass(frozen=True)
class MonthlyAttendance:
    group: object
    year: int
    month: int
    class_days: tuple
    class_dates: tuple
    enrollments: tuple
    records: tuple


def filter_date_range(queryset, start_date=None, end_date=None):
    if start_date is not None:
        queryset = queryset.filter(date__gte=start_date)
    if end_date is not None:
        queryset = queryset.filter(date__lte=end_date)
    return queryset


def _records():
    return AttendanceRecord.objects.select_related('enrollment__student')


def records_for_group(group_id, start_date=None, end_date=None, center_id=None):
    group = get_group_for_center(group_id, center_id)
    queryset = _records().filter(enrollment__group=group)
    return filter_date_range(queryset, start_date, end_date).order_by(
        '-date', 'enrollment__student__first_name', 'enrollment__student__last_name'
    )


def records_for_group_on(group_id, day, center_id=None):
    return records_for_group(group_id, day, day, center_id=center_id)


def records_for_enrollment(enrollment_id, start_date=None, end_date=None, center_id=None):
    queryset = _records().filter(enrollment_id=enrollment_id)
    if center_id is not None:
        queryset = queryset.filter(enrollment__group__center_id=center_id)
    return filter_date_range(queryset, start_date, end_date).order_by('-date')


def records_for_student(student_id, start_date=None, end_date=None, center_id=None):
    queryset = _records().filter(enrollment__student_id=student_id)
    if center_id is not None:
        queryset = queryset.filter(enrollment__student__center_id=center_id)
    return filter_date_range(queryset, start_date, end_date).order_by('-date')


def class_dates_in_range(from_date, to_date, class_days):
    """Dates in [from_date, to_date] falling on one of class_days (ascending)."""
    wanted = set(class_days)
    result = []
    d = from_date
    while d <= to_date:
        if weekday_name(d) in wanted:
            result.append(d)
        d += timedelta(days=1)
    return result


def monthly_attendance(group_id, year, month, center_id=None):
    """Class dates, roster and records of one calendar month."""
    if not 1 <= month <= 12:
        raise ValidationError({'month': 'Month must be between 1 and 12.'})
    group = get_group_for_center(group_id, center_id)
    class_days = tuple(dict.fromkeys(entry.day for entry in get_group_schedule(group)))

    _, last_day = monthrange(year, month)
    start_date = date(year, month, 1)
    end_date = date(year, month, last_day)

    return MonthlyAttendance(
        group=group,
        year=year,
        month=month,
        class_days=class_days,
        class_dates=tuple(class_dates_in_range(start_date, end_date, class_days)),
        enrollments=tuple(get_active_enrollments(group).order_by('student__last_name', 'student__first_name')),
        records=tuple(records_for_group(group.id, start_date, end_date)),
    )
