from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.urls import reverse  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.test import APITestCase  # type: ignore

from apps.accommodations.models import AccommodationPlace
from apps.customers.models import Customer
from apps.customers.services import record_visit, revert_visit
from apps.orders.models import Order
from apps.users.models import User


class CustomerApiTests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user(username="admin", password="pass12345", role=User.RoleChoices.ADMIN)
        self.operator = User.objects.create_user(username="op", password="pass12345", role=User.RoleChoices.OPERATOR)
        self.marketer = User.objects.create_user(username="mk", password="pass12345", role=User.RoleChoices.MARKETER)
        self.list_url = reverse("customer-list")

    def _create(self, **overrides):
        data = {"name": "Zhang San", "phone": "13812345678", "source": Customer.Source.WECHAT}
        data.update(overrides)
        return Customer.objects.create(**data)

    def test_create_customer(self):
        self.client.force_authenticate(self.operator)
        response = self.client.post(
            self.list_url,
            {"name": "Li Si", "phone": "13900001111", "source": "douyin", "tags": ["vip"]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["data"]["phone"], "13900001111")
        self.assertEqual(body["data"]["tags"], ["vip"])

    def test_duplicate_phone_rejected(self):
        self._create()
        self.client.force_authenticate(self.operator)
        response = self.client.post(
            self.list_url,
            {"name": "Other", "phone": "13812345678", "source": "friend"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.json()["error"]["code"], "DUPLICATE_PHONE")

    def test_update_phone_to_existing_rejected(self):
        self._create()
        other = self._create(name="Wang", phone="13700000000")
        self.client.force_authenticate(self.operator)
        response = self.client.patch(
            reverse("customer-detail", args=[other.pk]), {"phone": "13812345678"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_invalid_phone(self):
        self.client.force_authenticate(self.operator)
        response = self.client.post(
            self.list_url, {"name": "Bad", "phone": "12345", "source": "other"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        error = response.json()["error"]
        self.assertEqual(error["code"], "VALIDATION_ERROR")
        self.assertIn("phone", error["details"])

        customer = self._create()
        response = self.client.patch(
            reverse("customer-detail", args=[customer.id]), {"phone": "0138abc"}, format="json"
        )
        self.assertEqual(response.json()["error"]["code"], "VALIDATION_ERROR")
        self.assertFalse(Customer.objects.filter(phone="12345").exists())

    def test_list_search_and_pagination(self):
        for index in range(25):
            self._create(name=f"Guest {index}", phone=f"138000000{index:02d}")
        self._create(name="Needle", phone="13999999999", source=Customer.Source.DOUYIN)
        self.client.force_authenticate(self.marketer)

        response = self.client.get(self.list_url, {"page": 2, "page_size": 10})
        data = response.json()["data"]
        self.assertEqual(data["total"], 26)
        self.assertEqual(data["page"], 2)
        self.assertEqual(data["total_pages"], 3)
        self.assertEqual(len(data["items"]), 10)

        response = self.client.get(self.list_url, {"search": "needle"})
        self.assertEqual(response.json()["data"]["total"], 1)

        response = self.client.get(self.list_url, {"source": "douyin"})
        self.assertEqual(response.json()["data"]["items"][0]["name"], "Needle")

    def test_pagination_bounds(self):
        Customer.objects.bulk_create(
            Customer(name=f"Guest {index}", phone=f"138{index:08d}", source=Customer.Source.OTHER)
            for index in range(105)
        )
        self.client.force_authenticate(self.operator)

        data = self.client.get(self.list_url, {"page": 0}).json()["data"]
        self.assertEqual(data["page"], 1)
        self.assertEqual(data["page_size"], 20)
        self.assertEqual(data["total_pages"], 6)

        data = self.client.get(self.list_url, {"page": -3, "page_size": 500}).json()["data"]
        self.assertEqual(data["page"], 1)
        self.assertEqual(data["page_size"], 100)
        self.assertEqual(len(data["items"]), 100)

        data = self.client.get(self.list_url, {"page_size": 0}).json()["data"]
        self.assertEqual(data["page_size"], 1)
        self.assertEqual(len(data["items"]), 1)
        self.assertEqual(data["total_pages"], 105)

        response = self.client.get(self.list_url, {"page": 7})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()["error"]["code"], "NOT_FOUND")

    def test_marketer_cannot_create(self):
        self.client.force_authenticate(self.marketer)
        response = self.client.post(
            self.list_url, {"name": "X", "phone": "13800000001", "source": "other"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["error"]["code"], "FORBIDDEN")

    def test_anonymous_rejected(self):
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_delete_blocked_when_orders_exist(self):
        customer = self._create()
        place = AccommodationPlace.objects.create(name="Snow Lodge")
        Order.objects.create(
            order_number="ORD202501010001",
            customer=customer,
            accommodation_place=place,
            visit_date=date(2025, 1, 2),
            people_count=2,
            total_amount=Decimal("200.00"),
        )
        self.client.force_authenticate(self.admin)
        response = self.client.delete(reverse("customer-detail", args=[customer.pk]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        error = response.json()["error"]
        self.assertEqual(error["code"], "CUSTOMER_HAS_ORDERS")
        self.assertEqual(error["details"]["order_count"], 1)

    def test_delete_customer_without_orders(self):
        customer = self._create()
        self.client.force_authenticate(self.admin)
        response = self.client.delete(reverse("customer-detail", args=[customer.pk]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Customer.objects.exists())

    def test_retrieve_includes_recent_orders(self):
        customer = self._create()
        place = AccommodationPlace.objects.create(name="Snow Lodge")
        Order.objects.create(
            order_number="ORD202501010001",
            customer=customer,
            accommodation_place=place,
            visit_date=date(2025, 1, 2),
            people_count=2,
            total_amount=Decimal("200.00"),
        )
        self.client.force_authenticate(self.operator)
        response = self.client.get(reverse("customer-detail", args=[customer.pk]))
        orders = response.json()["data"]["recent_orders"]
        self.assertEqual(len(orders), 1)
        self.assertEqual(orders[0]["accommodation_place"], "Snow Lodge")

    def test_stats(self):
        self._create(source=Customer.Source.WECHAT, total_spent=Decimal("300"))
        self._create(name="B", phone="13700000000", source=Customer.Source.WECHAT, total_spent=Decimal("100"))
        self._create(name="C", phone="13600000000", source=Customer.Source.FRIEND)
        self.client.force_authenticate(self.operator)
        response = self.client.get(reverse("customer-stats"))
        data = response.json()["data"]
        self.assertEqual(data["total_customers"], 3)
        self.assertEqual(data["total_spent"], 400.0)
        self.assertEqual(data["average_spent"], 133.33)
        self.assertEqual(data["source_distribution"][0], {"source": "wechat", "count": 2})


class CustomerCounterTests(APITestCase):
    def test_record_and_revert_visit(self):
        customer = Customer.objects.create(name="A", phone="13812345678", source=Customer.Source.OTHER)
        record_visit(customer, Decimal("300"), date(2025, 2, 1))
        self.assertEqual(customer.visit_count, 1)
        self.assertEqual(customer.total_spent, Decimal("300"))
        self.assertEqual(customer.first_visit_date, date(2025, 2, 1))

        revert_visit(customer, Decimal("500"))
        self.assertEqual(customer.visit_count, 0)
        self.assertEqual(customer.total_spent, Decimal("0"))
