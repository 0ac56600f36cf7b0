from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.test import APITestCase  # type: ignore

from apps.accommodations.models import AccommodationPlace
from apps.customers.models import Customer
from apps.orders.models import Order, OrderItem
from apps.packages.models import Package, PackageItem
from apps.projects.models import Project
from apps.users.models import User


class ProjectApiTests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user(username="admin", password="pass12345", role=User.RoleChoices.ADMIN)
        self.marketer = User.objects.create_user(username="mk", password="pass12345", role=User.RoleChoices.MARKETER)
        self.ski = Project.objects.create(name="Skiing", price=Decimal("200"), season="winter", sort_order=2)
        self.rafting = Project.objects.create(
            name="Rafting", price=Decimal("150"), season="summer", sort_order=1, is_active=False
        )

    def test_list_ordered_and_filtered(self):
        self.client.force_authenticate(self.marketer)
        data = self.client.get(reverse("project-list")).json()["data"]
        self.assertEqual([item["name"] for item in data["items"]], ["Rafting", "Skiing"])

        data = self.client.get(reverse("project-list"), {"season": "winter"}).json()["data"]
        self.assertEqual(data["total"], 1)

        data = self.client.get(reverse("project-list"), {"is_active": "true", "search": "ski"}).json()["data"]
        self.assertEqual([item["id"] for item in data["items"]], [self.ski.id])

    def test_admin_creates_and_updates(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            reverse("project-list"),
            {"name": "Snowmobile", "price": "380.00", "unit": "per_group", "duration": 30, "capacity": 4},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        project_id = response.json()["data"]["id"]

        response = self.client.patch(reverse("project-detail", args=[project_id]), {"price": "400"}, format="json")
        self.assertEqual(response.json()["data"]["price"], 400.0)

    def test_negative_price_rejected(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse("project-list"), {"name": "Bad", "price": "-1"}, format="json")
        self.assertEqual(response.json()["error"]["code"], "VALIDATION_ERROR")

    def test_marketer_cannot_write(self):
        self.client.force_authenticate(self.marketer)
        response = self.client.post(reverse("project-list"), {"name": "X", "price": "1"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_delete_refused_when_in_package(self):
        package = Package.objects.create(name="Combo", price=Decimal("300"))
        PackageItem.objects.create(package=package, project=self.ski)
        self.client.force_authenticate(self.admin)
        response = self.client.delete(reverse("project-detail", args=[self.ski.id]))
        self.assertEqual(response.json()["error"]["code"], "PROJECT_HAS_PACKAGES")

    def test_delete_refused_when_ordered(self):
        order = Order.objects.create(
            order_number="ORD202501010001",
            customer=Customer.objects.create(name="Zhang San", phone="13812345678", source="wechat"),
            accommodation_place=AccommodationPlace.objects.create(name="Snow Lodge"),
            visit_date=timezone.localdate() + timedelta(days=1),
            people_count=1,
            total_amount=Decimal("200"),
        )
        OrderItem.objects.create(
            order=order, project=self.ski, quantity=1, unit_price=Decimal("200"), subtotal=Decimal("200")
        )
        self.client.force_authenticate(self.admin)
        response = self.client.delete(reverse("project-detail", args=[self.ski.id]))
        self.assertEqual(response.json()["error"]["code"], "PROJECT_HAS_ORDERS")

    def test_delete_unused_project(self):
        self.client.force_authenticate(self.admin)
        response = self.client.delete(reverse("project-detail", args=[self.rafting.id]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Project.objects.filter(pk=self.rafting.id).exists())
