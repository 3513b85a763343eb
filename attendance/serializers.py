"""
Serializers for attendance app
"""
from django.utils import timezone
from rest_framework import serializers

from students.serializers import StudentBriefSerializer
from .models import AttendanceRecord, AttendanceStatus


class AttendanceRecordSerializer(serializers.ModelSerializer):
    """Attendance record with the enrolled student embedded."""
    enrollmentId = serializers.IntegerField(source='enrollment_id', read_only=True)
    recordedBy = serializers.IntegerField(source='recorded_by_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    student = StudentBriefSerializer(source='enrollment.student', read_only=True)

    class Meta:
        model = AttendanceRecord
        fields = [
            'id', 'enrollmentId', 'date', 'status', 'note',
            'recordedBy', 'createdAt', 'updatedAt', 'student',
        ]
        read_only_fields = ['id', 'date', 'status', 'note']


class AttendanceCreateSerializer(serializers.Serializer):
    enrollmentId = serializers.IntegerField(min_value=1)
    date = serializers.DateField()
    status = serializers.ChoiceField(choices=AttendanceStatus.choices)
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class BulkAttendanceEntrySerializer(serializers.Serializer):
    studentId = serializers.IntegerField(min_value=1)
    status = serializers.ChoiceField(choices=AttendanceStatus.choices)
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class BulkAttendanceSerializer(serializers.Serializer):
    """Body: {groupId, date, attendanceRecords: [{studentId, status, note?}]}"""
    groupId = serializers.IntegerField(min_value=1)
    date = serializers.DateField()
    attendanceRecords = BulkAttendanceEntrySerializer(many=True, allow_empty=False)

    def to_entries(self):
        """Validated records in the shape the recorder expects."""
        entries = []
        for item in self.validated_data['attendanceRecords']:
            entry = {'student_id': item['studentId'], 'status': item['status']}
            if 'note' in item:
                entry['note'] = item['note']
            entries.append(entry)
        return entries


class AttendanceUpdateSerializer(serializers.Serializer):
    """Omitted fields stay as they are; "note": null clears the note."""
    status = serializers.ChoiceField(choices=AttendanceStatus.choices, required=False)
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('Provide status and/or note.')
        return attrs


class DateRangeQuerySerializer(serializers.Serializer):
    """?startDate=&endDate= (both optional, inclusive)."""
    startDate = serializers.DateField(required=False)
    endDate = serializers.DateField(required=False)

    def validate(self, attrs):
        start, end = attrs.get('startDate'), attrs.get('endDate')
        if start and end and start > end:
            raise serializers.ValidationError({'endDate': 'endDate must not be before startDate.'})
        return attrs


class MonthQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=1900, max_value=9999, required=False)
    month = serializers.IntegerField(min_value=1, max_value=12, required=False)

    def validate(self, attrs):
        today = timezone.localdate()
        attrs.setdefault('year', today.year)
        attrs.setdefault('month', today.month)
        return attrs


class BulkEntryOutcomeSerializer(serializers.Serializer):
    studentId = serializers.IntegerField(source='student_id')
    outcome = serializers.CharField()
    record = AttendanceRecordSerializer(allow_null=True)
    error = serializers.SerializerMethodField()

    def get_error(self, obj):
        if obj.ok:
            return None
        return {'code': obj.error_code, 'detail': obj.error_detail}


class BulkRecordResultSerializer(serializers.Serializer):
    groupId = serializers.IntegerField(source='group_id')
    date = serializers.DateField()
    saved = serializers.IntegerField()
    failed = serializers.IntegerField()
    results = BulkEntryOutcomeSerializer(source='entries', many=True)


class GroupAttendanceStatusSerializer(serializers.Serializer):
    studentId = serializers.IntegerField(source='student_id')
    enrollmentId = serializers.IntegerField(source='enrollment_id')
    firstName = serializers.CharField(source='first_name')
    lastName = serializers.CharField(source='last_name')
    currentWeekStatus = serializers.CharField(source='current_week_status', allow_null=True)
    hasAttendanceToday = serializers.BooleanField(source='has_attendance_today')
    lastAttendanceDate = serializers.DateField(source='last_attendance_date', allow_null=True)


class WeekCycleAttendanceSerializer(serializers.Serializer):
    groupId = serializers.IntegerField(source='group_id')
    startDate = serializers.DateField(source='start_date')
    endDate = serializers.DateField(source='end_date')
    isClassToday = serializers.BooleanField(source='is_class_today')
    anchorWeekday = serializers.CharField(source='anchor_weekday')
    attendanceExists = serializers.BooleanField(source='attendance_exists')
    attendanceDate = serializers.DateField(source='attendance_date', allow_null=True)
    students = GroupAttendanceStatusSerializer(many=True)


class ClassTodaySerializer(serializers.Serializer):
    isClassToday = serializers.BooleanField(source='is_class_today')
    classDays = serializers.ListField(source='class_days', child=serializers.CharField())
    today = serializers.CharField()
    date = serializers.DateField()


class RosterEntrySerializer(serializers.Serializer):
    id = serializers.IntegerField(source='student.id')
    firstName = serializers.CharField(source='student.first_name')
    lastName = serializers.CharField(source='student.last_name')
    enrollmentId = serializers.IntegerField(source='id')


class MonthlyAttendanceSerializer(serializers.Serializer):
    groupId = serializers.IntegerField(source='group.id')
    groupName = serializers.CharField(source='group.name')
    teacher = serializers.SerializerMethodField()
    year = serializers.IntegerField()
    month = serializers.IntegerField()
    classDays = serializers.ListField(source='class_days', child=serializers.CharField())
    classDatesList = serializers.ListField(source='class_dates', child=serializers.DateField())
    students = RosterEntrySerializer(source='enrollments', many=True)
    attendanceRecords = AttendanceRecordSerializer(source='records', many=True)

    def get_teacher(self, obj):
        teacher = obj.group.teacher
        return teacher.full_name if teacher else None


class AttendanceStatsSerializer(serializers.Serializer):
    present = serializers.IntegerField()
    absent = serializers.IntegerField()
    late = serializers.IntegerField()
    total = serializers.IntegerField()
    attendanceRate = serializers.IntegerField()
