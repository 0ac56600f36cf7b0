"""API tests for authentication endpoints."""

from __future__ import annotations

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class AuthAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            username="operator1",
            password="CorrectPass1",
            name="Operator",
            role=User.RoleChoices.OPERATOR,
        )

    def test_login_returns_tokens_and_user(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"username": "operator1", "password": "CorrectPass1"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.content)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertIn("token", body["data"])
        self.assertIn("refresh", body["data"])
        self.assertEqual(body["data"]["user"]["role"], "operator")

        self.user.refresh_from_db()
        self.assertIsNotNone(self.user.last_login)

    def test_login_with_wrong_password_is_rejected(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"username": "operator1", "password": "wrong"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error"]["code"], "INVALID_CREDENTIALS")

    def test_login_requires_fields(self) -> None:
        response = self.client.post(reverse("auth:login"), {"username": "operator1"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error"]["code"], "VALIDATION_ERROR")

    def test_login_limited_attempts(self) -> None:
        url = reverse("auth:login")
        wrong_payload = {"username": "operator1", "password": "wrong"}
        for _ in range(5):
            self.client.post(url, wrong_payload, format="json")

        self.user.refresh_from_db()
        self.assertTrue(self.user.is_locked)

        response = self.client.post(url, {"username": "operator1", "password": "CorrectPass1"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["error"]["code"], "ACCOUNT_LOCKED")

        # After lock expires user can login again
        self.user.locked_until = timezone.now() - timedelta(minutes=1)
        self.user.save(update_fields=["locked_until"])
        response = self.client.post(url, {"username": "operator1", "password": "CorrectPass1"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.content)

    def test_disabled_account_cannot_login(self) -> None:
        self.user.is_active = False
        self.user.save(update_fields=["is_active"])
        response = self.client.post(
            reverse("auth:login"),
            {"username": "operator1", "password": "CorrectPass1"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["error"]["code"], "ACCOUNT_DISABLED")

    def test_me_requires_authentication(self) -> None:
        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.json()["error"]["code"], "UNAUTHORIZED")

    def test_me_with_bearer_token(self) -> None:
        login = self.client.post(
            reverse("auth:login"),
            {"username": "operator1", "password": "CorrectPass1"},
            format="json",
        )
        token = login.json()["data"]["token"]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["data"]["username"], "operator1")

    def test_garbage_token_is_reported_as_invalid(self) -> None:
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.json()["error"]["code"], "INVALID_TOKEN")

    def test_change_password(self) -> None:
        self.client.force_authenticate(self.user)
        url = reverse("auth:password")

        response = self.client.put(url, {"old_password": "nope", "new_password": "NewPass1"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error"]["code"], "INVALID_PASSWORD")

        response = self.client.put(url, {"old_password": "CorrectPass1", "new_password": "abc"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error"]["code"], "VALIDATION_ERROR")

        response = self.client.put(
            url, {"old_password": "CorrectPass1", "new_password": "NewPass1"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.content)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("NewPass1"))

    def test_logout_acknowledges(self) -> None:
        self.client.force_authenticate(self.user)
        response = self.client.post(reverse("auth:logout"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.json()["success"])
