from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.core import mail  # type: ignore
from django.core.cache import cache  # type: ignore
from django.test import override_settings  # type: ignore
from django.urls import reverse  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.test import APITestCase  # type: ignore

from apps.accommodations.models import AccommodationPlace
from apps.bookings import services
from apps.bookings.models import Booking
from apps.packages.models import Package, PackageItem
from apps.projects.models import Project


class PublicApiTestMixin:
    def setUp(self):
        cache.clear()
        self.ski = Project.objects.create(name="Skiing", price=Decimal("200"), duration=120)
        self.hidden_project = Project.objects.create(name="Old ride", price=Decimal("50"), is_active=False)
        self.package = Package.objects.create(name="Winter Combo", price=Decimal("300"))
        PackageItem.objects.create(package=self.package, project=self.ski)
        self.hidden_package = Package.objects.create(name="Staff only", price=Decimal("100"), show_in_booking_form=False)
        self.hotel = AccommodationPlace.objects.create(name="Wanda Resort", type="external", address="万达度假区")
        self.visit_date = timezone.localdate() + timedelta(days=7)

    def payload(self, **overrides):
        data = {
            "customer_name": "Li Si",
            "customer_phone": "13900001111",
            "visit_date": self.visit_date.isoformat(),
            "people_count": 2,
            "hotel_name": "Wanda Resort",
            "hotel_id": self.hotel.id,
            "package_id": self.package.id,
            "notes": "Arriving late",
        }
        data.update(overrides)
        return data

    def submit(self, **overrides):
        return self.client.post(reverse("public-booking-create"), self.payload(**overrides), format="json")


class PublicBookingCreateTests(PublicApiTestMixin, APITestCase):
    def test_submit_booking(self):
        with self.captureOnCommitCallbacks(execute=True):
            response = self.submit(child_count=1)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.json()["data"]
        self.assertEqual(data["customer_phone"], "139****1111")
        self.assertEqual(data["adult_count"], 1)
        self.assertEqual(data["unit_price"], 300.0)
        self.assertEqual(data["child_price"], 240.0)
        self.assertEqual(data["total_amount"], 540.0)
        self.assertIn("（周", data["visit_date"])
        self.assertIn("Li Si", data["confirm_text"])

        booking = Booking.objects.get(booking_code=data["booking_code"])
        self.assertEqual(booking.source, Booking.Source.WECHAT_FORM)
        self.assertEqual(booking.customer_notes, "Arriving late")
        self.assertEqual(booking.hotel, self.hotel)

        self.assertEqual(len(mail.outbox), 1)
        self.assertIn(booking.booking_code, mail.outbox[0].subject)

    def test_submit_without_package_is_pending_price(self):
        response = self.submit(package_id=None)
        data = response.json()["data"]
        self.assertEqual(data["package_name"], "待定")
        self.assertEqual(data["total_amount"], 0.0)

    def test_business_validation_codes(self):
        cases = [
            ({"customer_phone": "12345"}, "INVALID_PHONE"),
            ({"visit_date": (timezone.localdate() - timedelta(days=1)).isoformat()}, "INVALID_DATE"),
            ({"people_count": 0}, "INVALID_PEOPLE_COUNT"),
            ({"people_count": 51}, "INVALID_PEOPLE_COUNT"),
            ({"people_count": 2, "child_count": 3}, "INVALID_CHILD_COUNT"),
        ]
        for overrides, code in cases:
            with self.subTest(code=code, overrides=overrides):
                response = self.submit(**overrides)
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertEqual(response.json()["error"]["code"], code)
        self.assertFalse(Booking.objects.exists())

    def test_missing_fields_fail_validation(self):
        response = self.client.post(reverse("public-booking-create"), {"customer_name": "Li Si"}, format="json")
        self.assertEqual(response.json()["error"]["code"], "VALIDATION_ERROR")

    def test_inactive_package_rejected(self):
        self.package.is_active = False
        self.package.save()
        response = self.submit()
        self.assertEqual(response.json()["error"]["code"], "PACKAGE_INACTIVE")

    @override_settings(PUBLIC_BOOKING_RATE_LIMIT=(2, 300))
    def test_rate_limited_per_phone(self):
        self.assertEqual(self.submit().status_code, status.HTTP_201_CREATED)
        self.assertEqual(self.submit().status_code, status.HTTP_201_CREATED)
        response = self.submit()
        self.assertEqual(response.status_code, status.HTTP_429_TOO_MANY_REQUESTS)
        self.assertFalse(response.json()["success"])

        self.assertEqual(self.submit(customer_phone="13900002222").status_code, status.HTTP_201_CREATED)


class PublicLookupTests(PublicApiTestMixin, APITestCase):
    def test_booking_status_lookup(self):
        booking = services.create_booking(
            customer_name="Li Si",
            customer_phone="13900001111",
            visit_date=self.visit_date,
            people_count=2,
            hotel_name="Wanda Resort",
        )
        response = self.client.get(reverse("public-booking-detail", args=[booking.booking_code]))
        data = response.json()["data"]
        self.assertEqual(data["status_text"], "待确认")
        self.assertEqual(data["customer_phone"], "139****1111")

        response = self.client.get(reverse("public-booking-detail", args=["BK000"]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()["error"]["code"], "BOOKING_NOT_FOUND")

    def test_order_query_by_phone(self):
        booking = services.create_booking(
            customer_name="Li Si",
            customer_phone="13900001111",
            visit_date=self.visit_date,
            people_count=2,
            hotel_name="Wanda Resort",
            package_id=self.package.id,
        )
        order = services.convert_to_order(booking)

        response = self.client.post(reverse("public-order-query"), {"phone": "13900001111"}, format="json")
        data = response.json()["data"]
        self.assertEqual(data["phone"], "139****1111")
        self.assertEqual(len(data["bookings"]), 1)
        self.assertEqual(data["orders"][0]["order_number"], order.order_number)
        self.assertEqual(data["orders"][0]["customer_phone"], "139****1111")

        response = self.client.post(reverse("public-order-query"), {"phone": "abc"}, format="json")
        self.assertEqual(response.json()["error"]["code"], "INVALID_PHONE")

        url = reverse("public-order-detail", args=["order", order.id])
        self.assertEqual(self.client.get(url, {"phone": "13900001111"}).json()["data"]["id"], order.id)
        self.assertEqual(self.client.get(url, {"phone": "13900009999"}).status_code, status.HTTP_404_NOT_FOUND)

        url = reverse("public-order-detail", args=["booking", booking.id])
        self.assertEqual(self.client.get(url, {"phone": "13900001111"}).json()["data"]["type"], "booking")


class PublicCatalogueTests(PublicApiTestMixin, APITestCase):
    def test_packages_only_show_booking_form_packages(self):
        response = self.client.get(reverse("public-package-list"))
        data = response.json()["data"]
        self.assertEqual([package["name"] for package in data], ["Winter Combo"])
        self.assertEqual(data[0]["projects"][0]["name"], "Skiing")

        response = self.client.get(reverse("public-package-detail", args=[self.hidden_package.id]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_hotels_end_with_other_option(self):
        data = self.client.get(reverse("public-hotel-list")).json()["data"]
        self.assertEqual(data[0]["name"], "Wanda Resort")
        self.assertEqual(data[0]["area"], "万达度假区")
        self.assertIsNone(data[-1]["id"])
        self.assertEqual(data[-1]["type"], "other")

    def test_activities_hide_inactive_projects(self):
        data = self.client.get(reverse("public-activity-list")).json()["data"]
        self.assertEqual([project["name"] for project in data], ["Skiing"])
        response = self.client.get(reverse("public-activity-detail", args=[self.hidden_project.id]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_about_returns_camp_info(self):
        data = self.client.get(reverse("public-about")).json()["data"]
        self.assertIn("name", data)
