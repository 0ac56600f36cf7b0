"""API tests for staff management."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class UserManagementAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            username="admin", password="AdminPass1", role=User.RoleChoices.ADMIN
        )
        self.operator = User.objects.create_user(
            username="operator", password="OperatorPass1", role=User.RoleChoices.OPERATOR
        )

    def test_non_admin_cannot_list_users(self) -> None:
        self.client.force_authenticate(self.operator)
        response = self.client.get(reverse("user-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["error"]["code"], "FORBIDDEN")

    def test_admin_lists_with_role_filter_and_pagination(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse("user-list"), {"role": "operator"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()["data"]
        self.assertEqual(data["total"], 1)
        self.assertEqual(data["page"], 1)
        self.assertEqual(data["page_size"], 20)
        self.assertEqual(data["total_pages"], 1)
        self.assertEqual(data["items"][0]["username"], "operator")

    def test_create_user_rejects_duplicate_username(self) -> None:
        self.client.force_authenticate(self.admin)
        payload = {"username": "coach1", "password": "CoachPass1", "role": "coach", "name": "Li"}
        response = self.client.post(reverse("user-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)
        self.assertEqual(response.json()["data"]["role"], "coach")

        response = self.client.post(reverse("user-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.json()["error"]["code"], "USERNAME_EXISTS")

    def test_create_user_rejects_malformed_username(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            reverse("user-list"),
            {"username": "bad name!*", "password": "CoachPass1", "role": "coach"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("username", response.json()["error"]["details"])
        self.assertFalse(User.objects.filter(username="bad name!*").exists())

    def test_create_user_validates_role_and_password(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            reverse("user-list"),
            {"username": "x1", "password": "123", "role": "pilot"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        details = response.json()["error"]["details"]
        self.assertIn("role", details)
        self.assertIn("password", details)

    def test_cannot_delete_self(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.delete(reverse("user-detail", args=[self.admin.pk]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error"]["code"], "CANNOT_DELETE_SELF")

    def test_last_admin_cannot_be_demoted(self) -> None:
        superuser = User.objects.create_superuser(username="root", password="RootPass1")
        superuser.role = User.RoleChoices.OPERATOR
        superuser.save(update_fields=["role"])
        self.client.force_authenticate(superuser)

        response = self.client.patch(
            reverse("user-detail", args=[self.admin.pk]), {"role": "operator"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error"]["code"], "LAST_ADMIN")

        response = self.client.delete(reverse("user-detail", args=[self.admin.pk]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error"]["code"], "LAST_ADMIN")

    def test_delete_operator(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.delete(reverse("user-detail", args=[self.operator.pk]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(User.objects.filter(pk=self.operator.pk).exists())

    def test_reset_password(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.put(
            reverse("user-reset-password", args=[self.operator.pk]),
            {"new_password": "Fresh123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.content)
        self.operator.refresh_from_db()
        self.assertTrue(self.operator.check_password("Fresh123"))
