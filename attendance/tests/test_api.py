"""
Attendance API: auth, status codes and response shapes.
"""
from datetime import date
from unittest.mock import patch

from django.test import TestCase
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import User
from attendance.models import AttendanceRecord
from core.models import Center
from .base import THURSDAY, TUESDAY, AttendanceFixtureMixin


class AttendanceAPITests(AttendanceFixtureMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="admin@center.test",
            password="pass12345",
            full_name="Admin",
            role=User.ROLE_ADMIN,
            center=self.center,
        )
        self.client.credentials(**self._auth_header(self.teacher))

    def _auth_header(self, user: User) -> dict:
        token = str(AccessToken.for_user(user))
        return {"HTTP_AUTHORIZATION": f"Bearer {token}"}

    def _bulk_body(self, *pairs, day="2026-10-20"):
        return {
            "groupId": self.group.id,
            "date": day,
            "attendanceRecords": [{"studentId": s.id, "status": status} for s, status in pairs],
        }

    def test_requires_authentication(self):
        client = APIClient()
        response = client.get(f"/api/attendance/stats/{self.group.id}")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["code"], "not_authenticated")

    def test_create_then_conflict(self):
        body = {"enrollmentId": self.enrollments[0].id, "date": "2026-10-20", "status": "present"}
        response = self.client.post("/api/attendance/", body, format="json")
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["status"], "present")
        self.assertEqual(response.data["student"]["id"], self.students[0].id)
        self.assertEqual(response.data["recordedBy"], self.teacher.id)

        response = self.client.post("/api/attendance/", body, format="json")
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["code"], "conflict")

    def test_create_unknown_enrollment(self):
        body = {"enrollmentId": 999999, "date": "2026-10-20", "status": "present"}
        response = self.client.post("/api/attendance/", body, format="json")
        self.assertEqual(response.status_code, 404)

    def test_create_invalid_status(self):
        body = {"enrollmentId": self.enrollments[0].id, "date": "2026-10-20", "status": "sick"}
        response = self.client.post("/api/attendance/", body, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "validation_error")
        self.assertIn("status", response.data["errors"])

    def test_bulk_reports_each_entry(self):
        s1, s2, _ = self.students
        body = self._bulk_body((s1, "present"), (self.outsider, "absent"), (s2, "late"))
        response = self.client.post("/api/attendance/bulk", body, format="json")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["saved"], 2)
        self.assertEqual(response.data["failed"], 1)
        results = response.data["results"]
        self.assertEqual([r["outcome"] for r in results], ["created", "failed", "created"])
        self.assertEqual(results[1]["studentId"], self.outsider.id)
        self.assertEqual(results[1]["error"]["code"], "conflict")
        self.assertIsNone(results[1]["record"])
        self.assertIsNone(results[0]["error"])

        response = self.client.post("/api/attendance/bulk", body, format="json")
        self.assertEqual([r["outcome"] for r in response.data["results"]], ["updated", "failed", "updated"])
        self.assertEqual(AttendanceRecord.objects.filter(date=TUESDAY).count(), 2)

    def test_bulk_rejects_malformed_body(self):
        response = self.client.post(
            "/api/attendance/bulk", self._bulk_body((self.students[0], "excused")), format="json"
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(AttendanceRecord.objects.exists())

        response = self.client.post(
            "/api/attendance/bulk",
            {"groupId": self.group.id, "date": "2026-10-20", "attendanceRecords": []},
            format="json",
        )
        self.assertEqual(response.status_code, 400)

    def test_bulk_unknown_group(self):
        body = self._bulk_body((self.students[0], "present"))
        body["groupId"] = 999999
        response = self.client.post("/api/attendance/bulk", body, format="json")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["code"], "not_found")

    @patch("attendance.services.cycle_reader.local_today", return_value=THURSDAY)
    def test_current_week_on_off_day(self, _today):
        AttendanceRecord.objects.create(enrollment=self.enrollments[0], date=TUESDAY, status="present")

        response = self.client.get(f"/api/attendance/group/{self.group.id}/current-week")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["startDate"], "2026-10-20")
        self.assertEqual(response.data["endDate"], "2026-10-27")
        self.assertFalse(response.data["isClassToday"])
        self.assertTrue(response.data["attendanceExists"])
        self.assertEqual(response.data["attendanceDate"], "2026-10-20")
        rows = {row["studentId"]: row for row in response.data["students"]}
        self.assertEqual(set(rows), {s.id for s in self.students})
        self.assertEqual(rows[self.students[0].id]["currentWeekStatus"], "present")
        self.assertIsNone(rows[self.students[1].id]["currentWeekStatus"])

    @patch("attendance.services.cycle_reader.local_today", return_value=TUESDAY)
    def test_current_week_without_schedule(self, _today):
        group = self.make_group("Unscheduled", [])
        response = self.client.get(f"/api/attendance/group/{group.id}/current-week")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "invalid_configuration")

    @patch("attendance.services.cycle_reader.local_today", return_value=THURSDAY)
    def test_class_today(self, _today):
        response = self.client.get(f"/api/attendance/group/{self.group.id}/class-today")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.data,
            {"isClassToday": False, "classDays": ["Tuesday"], "today": "Thursday", "date": "2026-10-22"},
        )

    def test_group_of_other_center_is_not_found(self):
        other = Center.objects.create(name="Other", slug="other")
        stranger = User.objects.create_user(
            email="stranger@other.test", password="pass12345", full_name="Stranger", center=other
        )
        self.client.credentials(**self._auth_header(stranger))
        for url in (
            f"/api/attendance/stats/{self.group.id}",
            f"/api/attendance/group/{self.group.id}",
            f"/api/attendance/group/{self.group.id}/current-week",
        ):
            with self.subTest(url=url):
                self.assertEqual(self.client.get(url).status_code, 404)

    def test_stats(self):
        e1, e2, e3 = self.enrollments
        AttendanceRecord.objects.create(enrollment=e1, date=TUESDAY, status="present")
        AttendanceRecord.objects.create(enrollment=e2, date=TUESDAY, status="present")
        AttendanceRecord.objects.create(enrollment=e3, date=TUESDAY, status="absent")

        response = self.client.get(f"/api/attendance/stats/{self.group.id}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.data,
            {"present": 2, "absent": 1, "late": 0, "total": 3, "attendanceRate": 67},
        )

        response = self.client.get(
            f"/api/attendance/stats/{self.group.id}", {"startDate": "2026-10-21"}
        )
        self.assertEqual(response.data["total"], 0)

        response = self.client.get(
            f"/api/attendance/stats/{self.group.id}",
            {"startDate": "2026-10-22", "endDate": "2026-10-20"},
        )
        self.assertEqual(response.status_code, 400)

    def test_group_date_listing(self):
        AttendanceRecord.objects.create(enrollment=self.enrollments[0], date=TUESDAY, status="late")
        AttendanceRecord.objects.create(enrollment=self.enrollments[1], date=THURSDAY, status="present")

        response = self.client.get(f"/api/attendance/group/{self.group.id}/date/2026-10-20")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([r["status"] for r in response.data], ["late"])

        response = self.client.get(f"/api/attendance/group/{self.group.id}/date/yesterday")
        self.assertEqual(response.status_code, 400)

        response = self.client.get(f"/api/attendance/group/{self.group.id}/date/2026-10-20junk")
        self.assertEqual(response.status_code, 400)
        self.assertIn("date", response.data["errors"])

    def test_enrollment_and_student_history(self):
        AttendanceRecord.objects.create(enrollment=self.enrollments[0], date=TUESDAY, status="late")
        AttendanceRecord.objects.create(enrollment=self.enrollments[0], date=THURSDAY, status="present")

        response = self.client.get(f"/api/attendance/enrollment/{self.enrollments[0].id}")
        self.assertEqual([r["date"] for r in response.data], ["2026-10-22", "2026-10-20"])

        response = self.client.get(
            f"/api/attendance/student/{self.students[0].id}", {"endDate": "2026-10-21"}
        )
        self.assertEqual([r["date"] for r in response.data], ["2026-10-20"])

    def test_monthly(self):
        AttendanceRecord.objects.create(enrollment=self.enrollments[0], date=TUESDAY, status="present")
        response = self.client.get(
            f"/api/attendance/group/{self.group.id}/monthly", {"year": 2026, "month": 10}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.data["classDatesList"], ["2026-10-06", "2026-10-13", "2026-10-20", "2026-10-27"]
        )
        self.assertEqual(response.data["teacher"], "Teacher")
        self.assertEqual(len(response.data["students"]), 3)
        self.assertEqual(len(response.data["attendanceRecords"]), 1)

    def test_update_and_delete_require_admin(self):
        record = AttendanceRecord.objects.create(
            enrollment=self.enrollments[0], date=TUESDAY, status="present"
        )
        url = f"/api/attendance/{record.id}"

        response = self.client.put(url, {"status": "late"}, format="json")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.client.delete(url).status_code, 403)

        self.client.credentials(**self._auth_header(self.admin))
        response = self.client.put(url, {"status": "late", "note": "bus"}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["status"], "late")
        self.assertEqual(response.data["note"], "bus")

        response = self.client.put(url, {"note": None}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.data["note"])
        self.assertEqual(response.data["status"], "late")

        response = self.client.put(url, {}, format="json")
        self.assertEqual(response.status_code, 400)

        self.assertEqual(self.client.delete(url).status_code, 204)
        self.assertEqual(self.client.delete(url).status_code, 404)
