"""
Attendance model: one record per enrollment per calendar day.
Unique constraint: (enrollment, date).
"""
from django.conf import settings
from django.db import models


class AttendanceStatus(models.TextChoices):
    PRESENT = 'present', 'Present'
    ABSENT = 'absent', 'Absent'
    LATE = 'late', 'Late'


class AttendanceRecord(models.Model):
    """
    Attendance of one enrolled student on one date.
    Re-recording the same (enrollment, date) updates this row; the unique
    constraint is what keeps concurrent bulk submissions from duplicating it.
    """
    enrollment = models.ForeignKey(
        'groups.Enrollment',
        on_delete=models.CASCADE,
        related_name='attendance_records',
    )
    date = models.DateField()
    status = models.CharField(max_length=10, choices=AttendanceStatus.choices)
    note = models.TextField(blank=True, null=True)
    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='recorded_attendance',
        db_column='recorded_by_id',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'attendance_records'
        verbose_name = 'Attendance Record'
        verbose_name_plural = 'Attendance Records'
        ordering = ['-date', 'enrollment']
        constraints = [
            models.UniqueConstraint(
                fields=['enrollment', 'date'],
                name='unique_enrollment_attendance_date',
            ),
        ]
        indexes = [
            models.Index(fields=['date'], name='attendance_date_idx'),
        ]

    def __str__(self):
        return f"{self.enrollment.student.full_name} - {self.date} - {self.status}"
