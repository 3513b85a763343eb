"""
Attendance statistics for a group over an optional inclusive date range.
"""
from decimal import Decimal, ROUND_HALF_UP

from django.db.models import Count

from groups.services import get_group_for_center
from attendance.models import AttendanceRecord, AttendanceStatus
from .history import filter_date_range


def attendance_rate(present, total):
    """Present share as an integer percentage, rounded half up; 0 when nothing is recorded."""
    if total <= 0:
        return 0
    rate = Decimal(present) * 100 / Decimal(total)
    return int(rate.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def count_by_status(queryset):
    """{AttendanceStatus: count} with every status present, zero when unseen."""
    counts = {status: 0 for status in AttendanceStatus}
    rows = queryset.values('status').annotate(count=Count('id')).order_by()
    for row in rows:
        counts[AttendanceStatus(row['status'])] += row['count']
    return counts


def attendance_stats(group_id, start_date=None, end_date=None, center_id=None):
    """
    Returns {present, absent, late, total, attendanceRate}.
    """
    group = get_group_for_center(group_id, center_id)
    queryset = filter_date_range(
        AttendanceRecord.objects.filter(enrollment__group=group), start_date, end_date
    )
    counts = count_by_status(queryset)
    total = sum(counts.values())
    result = {status.value: count for status, count in counts.items()}
    result['total'] = total
    result['attendanceRate'] = attendance_rate(counts[AttendanceStatus.PRESENT], total)
    return result
