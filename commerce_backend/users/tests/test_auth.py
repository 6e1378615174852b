from django.conf import settings
from django.test import TestCase
from rest_framework.test import APIClient

from users.models import Role, User


class StaffAuthTests(TestCase):
    """
    GUARANTEES:
    - Access token in the body, refresh token in an HTTP-only cookie
    - Wrong password, inactive and soft-deleted accounts share one 401
    - Refresh reads only the cookie
    """

    def setUp(self):
        self.client = APIClient()
        self.role = Role.objects.create(name="manager")
        self.user = User.objects.create_user(
            email="manager@example.com",
            password="s3cret-pass",
            name="Manager",
            role=self.role,
        )

    def _login(self, password="s3cret-pass", email="manager@example.com"):
        return self.client.post("/api/auth/login/", {"email": email, "password": password}, format="json")

    # --------------------------------------------------
    # LOGIN
    # --------------------------------------------------

    def test_login_returns_token_and_cookie(self):
        response = self._login()

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertTrue(data["access_token"])
        self.assertEqual(data["user"]["role_name"], "manager")

        cookie = response.cookies[settings.REFRESH_COOKIE_NAME]
        self.assertTrue(cookie["httponly"])
        self.assertEqual(cookie["samesite"], "Strict")

    def test_email_is_case_insensitive(self):
        self.assertEqual(self._login(email="MANAGER@example.com").status_code, 200)

    def test_wrong_password(self):
        response = self._login(password="nope")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"]["code"], "invalid_credentials")

    def test_inactive_user_cannot_login(self):
        self.user.is_active = False
        self.user.save()

        self.assertEqual(self._login().status_code, 401)

    # --------------------------------------------------
    # TOKENS
    # --------------------------------------------------

    def test_me_with_access_token(self):
        token = self._login().json()["data"]["access_token"]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["role_id"], self.role.id)

    def test_refresh_uses_cookie(self):
        self._login()

        response = self.client.post("/api/auth/refresh/")

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["data"]["access_token"])

    def test_refresh_without_cookie(self):
        response = self.client.post("/api/auth/refresh/")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"]["code"], "not_authenticated")

    def test_refresh_for_deactivated_user(self):
        self._login()
        User.objects.filter(pk=self.user.pk).update(is_active=False)

        response = self.client.post("/api/auth/refresh/")

        self.assertEqual(response.status_code, 401)

    def test_logout(self):
        self.assertEqual(self.client.post("/api/auth/logout/").status_code, 204)

        self._login()
        response = self.client.post("/api/auth/logout/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.cookies[settings.REFRESH_COOKIE_NAME].value, "")
