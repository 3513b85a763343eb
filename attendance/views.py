"""
Attendance API.
Endpoints (mounted under /api/attendance/):
- POST   /                                   Create one record
- POST   /bulk                               Bulk upsert for a group and date (per-entry outcomes)
- GET    /enrollment/{enrollment_id}         Records of one enrollment (?startDate=&endDate=)
- GET    /group/{group_id}                   Records of a group (?startDate=&endDate=)
- GET    /group/{group_id}/current-week      Current cycle with prefilled statuses
- GET    /group/{group_id}/date/{date}       Records of a group on one date
- GET    /group/{group_id}/class-today       {isClassToday, classDays, today}
- GET    /group/{group_id}/monthly           Class dates, roster and records of a month (?year=&month=)
- GET    /student/{student_id}               Records of a student across groups
- GET    /stats/{group_id}                   Status counts and attendance rate
- PUT    /{record_id}                        Update status/note
- DELETE /{record_id}                        Delete record
"""
import logging
from datetime import datetime

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsCenterAdmin, IsCenterStaff
from core.utils import center_scope_for
from .serializers import (
    AttendanceCreateSerializer,
    AttendanceRecordSerializer,
    AttendanceStatsSerializer,
    AttendanceUpdateSerializer,
    BulkAttendanceSerializer,
    BulkRecordResultSerializer,
    ClassTodaySerializer,
    DateRangeQuerySerializer,
    MonthlyAttendanceSerializer,
    MonthQuerySerializer,
    WeekCycleAttendanceSerializer,
)
from .services import cycle_reader, history, recorder, stats

logger = logging.getLogger(__name__)


def _date_range(request):
    serializer = DateRangeQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data.get('startDate'), serializer.validated_data.get('endDate')


def _parse_date(value):
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (ValueError, TypeError):
        raise ValidationError({'date': f"Invalid date {value!r}; expected YYYY-MM-DD"})


@api_view(["POST"])
@permission_classes([IsAuthenticated, IsCenterStaff])
def attendance_create_view(request):
    """
    POST /api/attendance/
    Body: { enrollmentId, date: "YYYY-MM-DD", status, note? }
    409 when the enrollment already has a record on that date (use /bulk to overwrite).
    """
    serializer = AttendanceCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    record = recorder.record_one(
        data['enrollmentId'],
        data['date'],
        data['status'],
        note=data.get('note'),
        recorded_by=request.user,
        center_id=center_scope_for(request.user),
    )
    return Response(AttendanceRecordSerializer(record).data, status=status.HTTP_201_CREATED)


@api_view(["POST"])
@permission_classes([IsAuthenticated, IsCenterStaff])
def attendance_bulk_view(request):
    """
    POST /api/attendance/bulk
    Body: { groupId, date: "YYYY-MM-DD", attendanceRecords: [{ studentId, status, note? }] }
    Creates or updates one record per student. Entries succeed or fail independently;
    the response lists each outcome so failed ones can be resubmitted.
    """
    serializer = BulkAttendanceSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    result = recorder.record_bulk(
        serializer.validated_data['groupId'],
        serializer.validated_data['date'],
        serializer.to_entries(),
        recorded_by=request.user,
        center_id=center_scope_for(request.user),
    )
    return Response(BulkRecordResultSerializer(result).data, status=status.HTTP_200_OK)


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsCenterStaff])
def attendance_by_enrollment_view(request, enrollment_id):
    """GET /api/attendance/enrollment/{enrollment_id}?startDate=&endDate="""
    start_date, end_date = _date_range(request)
    records = history.records_for_enrollment(
        enrollment_id, start_date, end_date, center_id=center_scope_for(request.user)
    )
    return Response(AttendanceRecordSerializer(records, many=True).data)


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsCenterStaff])
def attendance_by_group_view(request, group_id):
    """GET /api/attendance/group/{group_id}?startDate=&endDate="""
    start_date, end_date = _date_range(request)
    records = history.records_for_group(
        group_id, start_date, end_date, center_id=center_scope_for(request.user)
    )
    return Response(AttendanceRecordSerializer(records, many=True).data)


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsCenterStaff])
def attendance_current_week_view(request, group_id):
    """
    GET /api/attendance/group/{group_id}/current-week
    Current attendance cycle of the group with each active student's status in it.
    """
    view = cycle_reader.current_cycle_view(group_id, center_id=center_scope_for(request.user))
    return Response(WeekCycleAttendanceSerializer(view).data)


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsCenterStaff])
def attendance_group_date_view(request, group_id, date):
    """GET /api/attendance/group/{group_id}/date/{date}"""
    target_date = _parse_date(date)
    records = history.records_for_group_on(
        group_id, target_date, center_id=center_scope_for(request.user)
    )
    return Response(AttendanceRecordSerializer(records, many=True).data)


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsCenterStaff])
def attendance_class_today_view(request, group_id):
    """GET /api/attendance/group/{group_id}/class-today"""
    info = cycle_reader.class_today(group_id, center_id=center_scope_for(request.user))
    return Response(ClassTodaySerializer(info).data)


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsCenterStaff])
def attendance_group_monthly_view(request, group_id):
    """GET /api/attendance/group/{group_id}/monthly?year=2026&month=2"""
    query = MonthQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    monthly = history.monthly_attendance(
        group_id,
        query.validated_data['year'],
        query.validated_data['month'],
        center_id=center_scope_for(request.user),
    )
    return Response(MonthlyAttendanceSerializer(monthly).data)


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsCenterStaff])
def attendance_by_student_view(request, student_id):
    """GET /api/attendance/student/{student_id}?startDate=&endDate="""
    start_date, end_date = _date_range(request)
    records = history.records_for_student(
        student_id, start_date, end_date, center_id=center_scope_for(request.user)
    )
    return Response(AttendanceRecordSerializer(records, many=True).data)


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsCenterStaff])
def attendance_stats_view(request, group_id):
    """GET /api/attendance/stats/{group_id}?startDate=&endDate="""
    start_date, end_date = _date_range(request)
    result = stats.attendance_stats(
        group_id, start_date, end_date, center_id=center_scope_for(request.user)
    )
    return Response(AttendanceStatsSerializer(result).data)


@api_view(["PUT", "DELETE"])
@permission_classes([IsAuthenticated, IsCenterAdmin])
def attendance_detail_view(request, record_id):
    """
    PUT    /api/attendance/{record_id}  Body: { status?, note? }
    DELETE /api/attendance/{record_id}
    """
    center_id = center_scope_for(request.user)
    if request.method == "DELETE":
        recorder.delete_record(record_id, center_id=center_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = AttendanceUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    record = recorder.update_record(
        record_id,
        status=serializer.validated_data.get('status'),
        note=serializer.validated_data.get('note', recorder.UNCHANGED),
        center_id=center_id,
    )
    return Response(AttendanceRecordSerializer(record).data)
