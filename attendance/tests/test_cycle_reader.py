"""
Current-week view of a group: cycle window, prefilled statuses, roster coverage.
"""
from datetime import date

from django.test import TestCase
from rest_framework.exceptions import NotFound

from attendance.exceptions import InvalidConfiguration
from attendance.models import AttendanceRecord
from attendance.services.cycle_reader import class_today, current_cycle_view
from core.models import Center
from .base import MONDAY, PREV_TUESDAY, THURSDAY, TUESDAY, AttendanceFixtureMixin


class CurrentCycleViewTests(AttendanceFixtureMixin, TestCase):
    def record(self, enrollment, day, status):
        return AttendanceRecord.objects.create(enrollment=enrollment, date=day, status=status)

    def statuses(self, view):
        return {row.student_id: row.current_week_status for row in view.students}

    def test_class_day_with_attendance(self):
        e1, e2, _ = self.enrollments
        self.record(e1, TUESDAY, "present")
        self.record(e2, TUESDAY, "absent")

        view = current_cycle_view(self.group.id, today=TUESDAY)

        self.assertTrue(view.is_class_today)
        self.assertEqual(view.anchor_weekday, "Tuesday")
        self.assertEqual((view.start_date, view.end_date), (TUESDAY, date(2026, 10, 27)))
        self.assertTrue(view.attendance_exists)
        self.assertEqual(view.attendance_date, TUESDAY)
        s1, s2, s3 = self.students
        self.assertEqual(self.statuses(view), {s1.id: "present", s2.id: "absent", s3.id: None})
        today_flags = {row.student_id: row.has_attendance_today for row in view.students}
        self.assertEqual(today_flags, {s1.id: True, s2.id: True, s3.id: False})

    def test_off_day_points_at_anchor_date(self):
        self.record(self.enrollments[0], TUESDAY, "late")

        view = current_cycle_view(self.group.id, today=THURSDAY)

        self.assertFalse(view.is_class_today)
        self.assertEqual(view.start_date, TUESDAY)
        self.assertTrue(view.attendance_exists)
        self.assertEqual(view.attendance_date, TUESDAY)
        self.assertEqual(self.statuses(view)[self.students[0].id], "late")
        self.assertFalse(any(row.has_attendance_today for row in view.students))

    def test_no_records_in_cycle(self):
        view = current_cycle_view(self.group.id, today=THURSDAY)
        self.assertFalse(view.attendance_exists)
        self.assertIsNone(view.attendance_date)
        self.assertTrue(all(row.current_week_status is None for row in view.students))
        self.assertTrue(all(row.last_attendance_date is None for row in view.students))

    def test_records_outside_cycle_are_ignored(self):
        self.record(self.enrollments[0], PREV_TUESDAY, "absent")

        view = current_cycle_view(self.group.id, today=TUESDAY)
        self.assertIsNone(self.statuses(view)[self.students[0].id])
        self.assertFalse(view.attendance_exists)

        # On Monday the previous Tuesday is still the current cycle
        view = current_cycle_view(self.group.id, today=MONDAY)
        self.assertEqual(view.start_date, PREV_TUESDAY)
        self.assertEqual(self.statuses(view)[self.students[0].id], "absent")
        self.assertEqual(view.attendance_date, PREV_TUESDAY)

    def test_latest_record_in_cycle_wins(self):
        group = self.make_group("Twice a week", ["Tuesday", "Thursday"])
        enrollment = self.enroll(self.students[0], group)
        self.record(enrollment, TUESDAY, "absent")
        self.record(enrollment, THURSDAY, "present")

        # Friday: first scheduled weekday anchors the cycle at Tuesday
        view = current_cycle_view(group.id, today=date(2026, 10, 23), policy="first_scheduled")

        self.assertEqual(view.anchor_weekday, "Tuesday")
        self.assertEqual(view.start_date, TUESDAY)
        self.assertEqual(view.attendance_date, TUESDAY)
        row = view.students[0]
        self.assertEqual(row.current_week_status, "present")
        self.assertEqual(row.last_attendance_date, THURSDAY)
        self.assertFalse(row.has_attendance_today)

    def test_roster_is_exactly_active_enrollments(self):
        inactive = self.make_student("Gone Student", is_active=False)
        self.enroll(inactive)
        other_group = self.make_group("Other group", ["Tuesday"])
        self.enroll(self.outsider, other_group)

        view = current_cycle_view(self.group.id, today=TUESDAY)

        ids = [row.student_id for row in view.students]
        self.assertEqual(len(ids), len(set(ids)))
        self.assertEqual(set(ids), {s.id for s in self.students})

    def test_group_without_enrollments(self):
        group = self.make_group("Empty", ["Tuesday"])
        view = current_cycle_view(group.id, today=TUESDAY)
        self.assertEqual(view.students, ())
        self.assertFalse(view.attendance_exists)

    def test_group_without_schedule(self):
        group = self.make_group("Unscheduled", [])
        with self.assertRaises(InvalidConfiguration):
            current_cycle_view(group.id, today=TUESDAY)

    def test_group_scoped_to_center(self):
        other = Center.objects.create(name="Other", slug="other")
        with self.assertRaises(NotFound):
            current_cycle_view(self.group.id, center_id=other.id, today=TUESDAY)
        with self.assertRaises(NotFound):
            current_cycle_view(999999, today=TUESDAY)


class ClassTodayTests(AttendanceFixtureMixin, TestCase):
    def test_class_today(self):
        info = class_today(self.group.id, today=TUESDAY)
        self.assertTrue(info.is_class_today)
        self.assertEqual(info.class_days, ("Tuesday",))
        self.assertEqual(info.today, "Tuesday")
        self.assertEqual(info.date, TUESDAY)

    def test_not_class_today(self):
        info = class_today(self.group.id, today=THURSDAY)
        self.assertFalse(info.is_class_today)
        self.assertEqual(info.class_days, ("Tuesday",))
        self.assertEqual(info.today, "Thursday")

    def test_group_without_schedule_never_meets(self):
        group = self.make_group("Unscheduled", [])
        info = class_today(group.id, today=TUESDAY)
        self.assertFalse(info.is_class_today)
        self.assertEqual(info.class_days, ())
