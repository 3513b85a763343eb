from datetime import date

from django.test import SimpleTestCase, TestCase
from rest_framework.exceptions import NotFound

from attendance.models import AttendanceRecord
from attendance.services.history import class_dates_in_range, monthly_attendance
from attendance.services.stats import attendance_rate, attendance_stats
from core.models import Center
from .base import PREV_TUESDAY, THURSDAY, TUESDAY, AttendanceFixtureMixin


class AttendanceRateTests(SimpleTestCase):
    def test_no_records(self):
        self.assertEqual(attendance_rate(0, 0), 0)

    def test_rounds_half_up(self):
        self.assertEqual(attendance_rate(2, 3), 67)
        self.assertEqual(attendance_rate(1, 8), 13)
        self.assertEqual(attendance_rate(1, 3), 33)
        self.assertEqual(attendance_rate(5, 5), 100)


class AttendanceStatsTests(AttendanceFixtureMixin, TestCase):
    def test_group_without_records(self):
        self.assertEqual(
            attendance_stats(self.group.id),
            {"present": 0, "absent": 0, "late": 0, "total": 0, "attendanceRate": 0},
        )

    def test_counts_and_rate(self):
        e1, e2, e3 = self.enrollments
        AttendanceRecord.objects.create(enrollment=e1, date=TUESDAY, status="present")
        AttendanceRecord.objects.create(enrollment=e2, date=TUESDAY, status="present")
        AttendanceRecord.objects.create(enrollment=e3, date=TUESDAY, status="absent")

        self.assertEqual(
            attendance_stats(self.group.id),
            {"present": 2, "absent": 1, "late": 0, "total": 3, "attendanceRate": 67},
        )

    def test_late_is_not_present(self):
        AttendanceRecord.objects.create(enrollment=self.enrollments[0], date=TUESDAY, status="late")
        result = attendance_stats(self.group.id)
        self.assertEqual(result["late"], 1)
        self.assertEqual(result["attendanceRate"], 0)

    def test_date_range_is_inclusive(self):
        e1 = self.enrollments[0]
        AttendanceRecord.objects.create(enrollment=e1, date=PREV_TUESDAY, status="absent")
        AttendanceRecord.objects.create(enrollment=e1, date=TUESDAY, status="present")
        AttendanceRecord.objects.create(enrollment=e1, date=THURSDAY, status="present")

        result = attendance_stats(self.group.id, start_date=TUESDAY, end_date=THURSDAY)
        self.assertEqual(result["total"], 2)
        self.assertEqual(result["attendanceRate"], 100)

        result = attendance_stats(self.group.id, end_date=PREV_TUESDAY)
        self.assertEqual(result["absent"], 1)
        self.assertEqual(result["total"], 1)

    def test_other_groups_not_counted(self):
        other_group = self.make_group("Other", ["Thursday"])
        enrollment = self.enroll(self.outsider, other_group)
        AttendanceRecord.objects.create(enrollment=enrollment, date=THURSDAY, status="present")
        self.assertEqual(attendance_stats(self.group.id)["total"], 0)

    def test_group_of_other_center(self):
        other = Center.objects.create(name="Other", slug="other")
        with self.assertRaises(NotFound):
            attendance_stats(self.group.id, center_id=other.id)


class MonthlyAttendanceTests(AttendanceFixtureMixin, TestCase):
    def test_class_dates_in_range(self):
        dates = class_dates_in_range(date(2026, 10, 1), date(2026, 10, 31), ["Tuesday"])
        self.assertEqual(dates, [date(2026, 10, 6), date(2026, 10, 13), date(2026, 10, 20), date(2026, 10, 27)])

    def test_month_view(self):
        AttendanceRecord.objects.create(enrollment=self.enrollments[0], date=TUESDAY, status="present")
        AttendanceRecord.objects.create(enrollment=self.enrollments[0], date=date(2026, 11, 3), status="absent")

        monthly = monthly_attendance(self.group.id, 2026, 10)

        self.assertEqual(monthly.class_days, ("Tuesday",))
        self.assertEqual(len(monthly.class_dates), 4)
        self.assertEqual(len(monthly.enrollments), 3)
        self.assertEqual([r.date for r in monthly.records], [TUESDAY])
