"""
Group services - roster and schedule lookups used by attendance.
Single source of truth for enrollment queries.
"""
from rest_framework.exceptions import NotFound

from .models import Group, Enrollment


def get_group_for_center(group_id, center_id=None):
    """
    Load a group, restricted to the caller's center when center_id is given.
    Raises NotFound when the group does not exist or belongs to another center.
    """
    queryset = Group.objects.all()
    if center_id is not None:
        queryset = queryset.filter(center_id=center_id)
    try:
        return queryset.get(id=group_id)
    except (Group.DoesNotExist, ValueError, TypeError):
        raise NotFound(f"Group {group_id} not found or does not belong to this center")


def get_group_schedule(group):
    """Schedule entries in stored order."""
    return list(group.schedules.order_by('id'))


def get_active_enrollments(group):
    """
    Canonical queryset: enrollments of the group whose student is active.
    """
    return Enrollment.objects.filter(
        group=group, student__is_active=True
    ).select_related('student')


def enrollment_exists(group, student_id):
    """Return the enrollment id for (group, student) or None (also for malformed ids)."""
    try:
        return (
            Enrollment.objects.filter(group=group, student_id=student_id)
            .values_list('id', flat=True)
            .first()
        )
    except (ValueError, TypeError):
        return None
