from datetime import time
from io import StringIO

from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from rest_framework.exceptions import NotFound

from accounts.models import User
from core.models import Center
from groups.models import Enrollment, Group, GroupSchedule
from groups.services import (
    enrollment_exists,
    get_active_enrollments,
    get_group_for_center,
    get_group_schedule,
)
from students.models import Student


class GroupServicesTests(TestCase):
    def setUp(self):
        self.center = Center.objects.create(name="Test Center", slug="test-center")
        self.group = Group.objects.create(center=self.center, name="Evening")
        self.active = Student.objects.create(center=self.center, first_name="Ada", last_name="Active")
        self.inactive = Student.objects.create(
            center=self.center, first_name="Ina", last_name="Inactive", is_active=False
        )
        self.enrollment = Enrollment.objects.create(student=self.active, group=self.group)
        Enrollment.objects.create(student=self.inactive, group=self.group)

    def test_group_scoped_to_center(self):
        self.assertEqual(get_group_for_center(self.group.id, self.center.id), self.group)
        self.assertEqual(get_group_for_center(self.group.id), self.group)
        other = Center.objects.create(name="Other", slug="other")
        with self.assertRaises(NotFound):
            get_group_for_center(self.group.id, other.id)

    def test_schedule_keeps_stored_order(self):
        GroupSchedule.objects.create(group=self.group, day="Thursday", start_time=time(18), end_time=time(19))
        GroupSchedule.objects.create(group=self.group, day="Monday", start_time=time(18), end_time=time(19))
        self.assertEqual([s.day for s in get_group_schedule(self.group)], ["Thursday", "Monday"])

    def test_schedule_times_validated(self):
        entry = GroupSchedule(group=self.group, day="Monday", start_time=time(19), end_time=time(18))
        with self.assertRaises(ValidationError):
            entry.clean()

    def test_active_enrollments_only(self):
        self.assertEqual(list(get_active_enrollments(self.group)), [self.enrollment])

    def test_enrollment_exists(self):
        self.assertEqual(enrollment_exists(self.group, self.active.id), self.enrollment.id)
        outsider = Student.objects.create(center=self.center, first_name="Out", last_name="Sider")
        self.assertIsNone(enrollment_exists(self.group, outsider.id))
        self.assertIsNone(enrollment_exists(self.group, "abc"))


class SeedDemoCommandTests(TestCase):
    def test_seed_demo(self):
        out = StringIO()
        call_command("seed_demo", "--days", "Tuesday", "Thursday", "--students", "3", stdout=out)

        group = Group.objects.get(name="Demo Group")
        self.assertEqual([s.day for s in get_group_schedule(group)], ["Tuesday", "Thursday"])
        self.assertEqual(group.enrollments.count(), 3)
        self.assertTrue(User.objects.filter(role=User.ROLE_ADMIN).exists())
        self.assertIn("Done.", out.getvalue())

        # Re-running does not duplicate anything
        call_command("seed_demo", "--students", "3", stdout=StringIO())
        self.assertEqual(Group.objects.count(), 1)
        self.assertEqual(Enrollment.objects.count(), 3)

    def test_unknown_weekday(self):
        with self.assertRaises(CommandError):
            call_command("seed_demo", "--days", "Caturday", stdout=StringIO())
