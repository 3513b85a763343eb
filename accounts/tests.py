"""
Auth and role tests.
- Login returns JWT pair and user payload
- Wrong password returns 401
- User without a staff role cannot reach attendance endpoints
"""
from django.test import TestCase
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import User
from core.models import Center


class AuthTests(TestCase):
    def setUp(self):
        self.center = Center.objects.create(name="Test Center", slug="test-center")
        self.client = APIClient()
        self.teacher = User.objects.create_user(
            email="teacher@center.test",
            password="pass12345",
            full_name="Teacher",
            role=User.ROLE_TEACHER,
            center=self.center,
        )

    def _auth_header(self, user: User) -> dict:
        token = str(AccessToken.for_user(user))
        return {"HTTP_AUTHORIZATION": f"Bearer {token}"}

    def test_login_returns_tokens(self):
        response = self.client.post(
            "/api/auth/login",
            {"email": "teacher@center.test", "password": "pass12345"},
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn("accessToken", response.data)
        self.assertIn("refreshToken", response.data)
        self.assertEqual(response.data["user"]["role"], "teacher")
        self.assertEqual(response.data["user"]["centerId"], self.center.id)

    def test_login_wrong_password(self):
        response = self.client.post(
            "/api/auth/login",
            {"email": "teacher@center.test", "password": "nope"},
            format="json",
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["code"], "invalid_credentials")

    def test_login_disabled_account(self):
        self.teacher.is_active = False
        self.teacher.save(update_fields=["is_active"])
        response = self.client.post(
            "/api/auth/login",
            {"email": "teacher@center.test", "password": "pass12345"},
            format="json",
        )
        self.assertEqual(response.status_code, 401)

    def test_me(self):
        self.client.credentials(**self._auth_header(self.teacher))
        response = self.client.get("/api/auth/me")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["email"], "teacher@center.test")
        self.assertEqual(response.data["fullName"], "Teacher")

    def test_unknown_role_is_forbidden(self):
        guest = User.objects.create_user(
            email="guest@center.test", password="pass12345", full_name="Guest", role="guest"
        )
        self.client.credentials(**self._auth_header(guest))
        response = self.client.get("/api/attendance/stats/1")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data["code"], "permission_denied")

    def test_superuser_is_admin(self):
        admin = User.objects.create_superuser(
            email="root@center.test", password="pass12345", full_name="Root"
        )
        self.assertEqual(admin.role, User.ROLE_ADMIN)
        self.assertTrue(admin.is_staff)
