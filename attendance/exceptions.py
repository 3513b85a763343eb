"""
Attendance error taxonomy.
All subclass DRF's APIException so config.exceptions renders them as {detail, code}.
Not-found cases use rest_framework.exceptions.NotFound directly.
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class InvalidConfiguration(APIException):
    """Group schedule is unusable: no schedule at all, or an unknown weekday name."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid group configuration.'
    default_code = 'invalid_configuration'


class EnrollmentConflict(APIException):
    """Bulk entry targets a student that is not enrolled in the group."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Student is not enrolled in this group.'
    default_code = 'conflict'


class AttendanceConflict(APIException):
    """Single-record create for an (enrollment, date) pair that already has a record."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Attendance already recorded for this enrollment and date.'
    default_code = 'conflict'
