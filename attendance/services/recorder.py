"""
Attendance recording.

- record_one: explicit create of one (enrollment, date) record; an existing record is a conflict.
- record_bulk: per-student upsert for one group and date. Entries are independent:
  each runs in its own savepoint and reports created / updated / failed, so callers
  can retry only the failures. Re-submitting converges to the latest values.

The unique constraint on (enrollment, date) backs both paths. update_or_create
re-reads and updates when a concurrent insert wins the race for the same pair.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from django.db import IntegrityError, transaction
from rest_framework.exceptions import APIException, NotFound, ValidationError

from groups.models import Enrollment
from groups.services import enrollment_exists, get_group_for_center
from attendance.exceptions import AttendanceConflict, EnrollmentConflict
from attendance.models import AttendanceRecord, AttendanceStatus
from .week_cycle import as_calendar_day

logger = logging.getLogger(__name__)

OUTCOME_CREATED = 'created'
OUTCOME_UPDATED = 'updated'
OUTCOME_FAILED = 'failed'

# Marks "field not supplied" where None is a meaningful value
UNCHANGED = object()


@dataclass
class BulkEntryOutcome:
    student_id: object
    outcome: str
    record: Optional[AttendanceRecord] = None
    error_code: Optional[str] = None
    error_detail: Optional[str] = None

    @property
    def ok(self):
        return self.outcome != OUTCOME_FAILED


@dataclass
class BulkRecordResult:
    group_id: int
    date: object
    entries: list = field(default_factory=list)

    @property
    def saved(self):
        return sum(1 for e in self.entries if e.ok)

    @property
    def failed(self):
        return len(self.entries) - self.saved

    @property
    def records(self):
        return [e.record for e in self.entries if e.ok]


def coerce_status(value):
    """Map a raw status string onto AttendanceStatus or raise ValidationError."""
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise ValidationError({'status': f"Invalid status {value!r}; expected one of {list(AttendanceStatus.values)}"})


def _record_queryset():
    return AttendanceRecord.objects.select_related('enrollment__student')


def record_one(enrollment_id, date, status, note=None, recorded_by=None, center_id=None):
    """
    Create the attendance record for (enrollment, date).
    Raises NotFound for an unknown enrollment and AttendanceConflict when the pair is already recorded.
    """
    day = as_calendar_day(date)
    status = coerce_status(status)
    try:
        enrollments = Enrollment.objects.select_related('student')
        if center_id is not None:
            enrollments = enrollments.filter(group__center_id=center_id)
        enrollment = enrollments.get(id=enrollment_id)
    except (Enrollment.DoesNotExist, ValueError, TypeError):
        raise NotFound(f"Enrollment {enrollment_id} not found")

    if AttendanceRecord.objects.filter(enrollment=enrollment, date=day).exists():
        raise AttendanceConflict(
            f"Attendance for enrollment {enrollment.id} on {day.isoformat()} already exists"
        )
    try:
        with transaction.atomic():
            record = AttendanceRecord.objects.create(
                enrollment=enrollment,
                date=day,
                status=status,
                note=note,
                recorded_by=recorded_by,
            )
    except IntegrityError:
        # Lost the race against a concurrent create for the same pair
        raise AttendanceConflict(
            f"Attendance for enrollment {enrollment.id} on {day.isoformat()} already exists"
        )
    logger.info('Attendance created: enrollment=%s date=%s status=%s', enrollment.id, day, status)
    return record


def _upsert_entry(group, day, entry, recorded_by):
    student_id = entry.get('student_id')
    enrollment_id = enrollment_exists(group, student_id)
    if enrollment_id is None:
        raise EnrollmentConflict(f"Student {student_id} is not enrolled in this group")

    defaults = {
        'status': coerce_status(entry.get('status')),
        'recorded_by': recorded_by,
    }
    # An omitted note keeps whatever note the record already has
    if 'note' in entry:
        defaults['note'] = entry['note']
    return AttendanceRecord.objects.update_or_create(
        enrollment_id=enrollment_id,
        date=day,
        defaults=defaults,
    )


def record_bulk(group_id, date, entries, recorded_by=None, center_id=None):
    """
    Upsert attendance for many students of one group on one date.

    entries: iterable of {'student_id', 'status', 'note'?}.
    A missing/out-of-scope group aborts the call (NotFound); per-entry problems
    (no enrollment, bad status) are reported in the result and do not stop the batch.
    """
    group = get_group_for_center(group_id, center_id)
    day = as_calendar_day(date)
    result = BulkRecordResult(group_id=group.id, date=day)

    for entry in entries:
        student_id = entry.get('student_id')
        try:
            with transaction.atomic():
                record, created = _upsert_entry(group, day, entry, recorded_by)
        except (EnrollmentConflict, NotFound, ValidationError) as exc:
            logger.warning(
                'Bulk attendance entry failed: group=%s date=%s student=%s: %s',
                group.id, day, student_id, exc.detail,
            )
            result.entries.append(_failed_outcome(student_id, exc))
            continue
        result.entries.append(BulkEntryOutcome(
            student_id=student_id,
            outcome=OUTCOME_CREATED if created else OUTCOME_UPDATED,
            record=record,
        ))

    logger.info(
        'Bulk attendance saved: group=%s date=%s saved=%s failed=%s',
        group.id, day, result.saved, result.failed,
    )
    return result


def _failed_outcome(student_id, exc: APIException):
    detail = exc.detail
    if isinstance(detail, dict):
        detail = '; '.join(f"{k}: {v[0] if isinstance(v, list) else v}" for k, v in detail.items())
    elif isinstance(detail, list):
        detail = '; '.join(str(d) for d in detail)
    return BulkEntryOutcome(
        student_id=student_id,
        outcome=OUTCOME_FAILED,
        error_code='validation_error' if isinstance(exc, ValidationError) else exc.default_code,
        error_detail=str(detail),
    )


def get_record(record_id, center_id=None):
    queryset = _record_queryset()
    if center_id is not None:
        queryset = queryset.filter(enrollment__group__center_id=center_id)
    try:
        return queryset.get(id=record_id)
    except (AttendanceRecord.DoesNotExist, ValueError, TypeError):
        raise NotFound(f"Attendance record {record_id} not found")


def update_record(record_id, status=None, note=UNCHANGED, center_id=None):
    """
    Direct administrative change of status and/or note.
    note=None clears the note, matching an explicit null in bulk entries.
    """
    record = get_record(record_id, center_id)
    update_fields = ['updated_at']
    if status is not None:
        record.status = coerce_status(status)
        update_fields.append('status')
    if note is not UNCHANGED:
        record.note = note
        update_fields.append('note')
    record.save(update_fields=update_fields)
    logger.info('Attendance record %s updated (%s)', record.id, ', '.join(update_fields[1:]) or 'no changes')
    return record


def delete_record(record_id, center_id=None):
    record = get_record(record_id, center_id)
    record.delete()
    logger.info('Attendance record %s deleted', record_id)
