from datetime import date

from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase, override_settings

from attendance.exceptions import InvalidConfiguration
from attendance.services.class_day import (
    POLICY_FIRST_SCHEDULED,
    POLICY_NEAREST_PAST,
    resolve,
)
from .base import THURSDAY, TUESDAY

WEDNESDAY = date(2026, 10, 21)


class ClassDayResolverTests(SimpleTestCase):
    def test_class_today_anchors_on_today(self):
        resolution = resolve(["Thursday", "Tuesday"], TUESDAY)
        self.assertTrue(resolution.is_class_today)
        self.assertEqual(resolution.anchor_weekday, "Tuesday")
        self.assertEqual(resolution.class_days, ("Thursday", "Tuesday"))

    def test_not_class_today(self):
        resolution = resolve(["Tuesday"], THURSDAY)
        self.assertFalse(resolution.is_class_today)
        self.assertEqual(resolution.anchor_weekday, "Tuesday")

    def test_first_scheduled_policy(self):
        resolution = resolve(["Friday", "Monday"], WEDNESDAY, policy=POLICY_FIRST_SCHEDULED)
        self.assertEqual(resolution.anchor_weekday, "Friday")

    def test_nearest_past_policy(self):
        # Monday 2026-10-19 is more recent than Friday 2026-10-16
        resolution = resolve(["Friday", "Monday"], WEDNESDAY, policy=POLICY_NEAREST_PAST)
        self.assertEqual(resolution.anchor_weekday, "Monday")

    @override_settings(ATTENDANCE_ANCHOR_POLICY=POLICY_NEAREST_PAST)
    def test_policy_read_from_settings(self):
        self.assertEqual(resolve(["Friday", "Monday"], WEDNESDAY).anchor_weekday, "Monday")

    @override_settings(ATTENDANCE_ANCHOR_POLICY="random")
    def test_unknown_policy_is_improperly_configured(self):
        with self.assertRaises(ImproperlyConfigured):
            resolve(["Friday"], WEDNESDAY)

    def test_unknown_policy_not_consulted_on_class_day(self):
        resolution = resolve(["Wednesday"], WEDNESDAY, policy="random")
        self.assertTrue(resolution.is_class_today)

    def test_duplicate_weekdays_collapse(self):
        resolution = resolve(["Tuesday", "Thursday", "Tuesday"], WEDNESDAY)
        self.assertEqual(resolution.class_days, ("Tuesday", "Thursday"))

    def test_empty_schedule(self):
        with self.assertRaises(InvalidConfiguration):
            resolve([], TUESDAY)

    def test_unknown_weekday_in_schedule(self):
        with self.assertRaises(InvalidConfiguration):
            resolve(["Tuesday", "Tuesdy"], TUESDAY)
