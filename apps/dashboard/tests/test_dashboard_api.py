from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from django.urls import reverse  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.test import APITestCase  # type: ignore

from apps.accommodations.models import AccommodationPlace
from apps.customers.models import Customer
from apps.dashboard import services
from apps.orders.models import Order, OrderItem
from apps.projects.models import Project
from apps.users.models import User

TODAY = date(2025, 3, 15)


def aware(day: date) -> datetime:
    return timezone.make_aware(datetime(day.year, day.month, day.day, 12))


class DashboardTestMixin:
    def setUp(self):
        self.operator = User.objects.create_user(username="op", password="pass12345", role=User.RoleChoices.OPERATOR)
        self.coach = User.objects.create_user(username="coach", password="pass12345", role=User.RoleChoices.COACH)
        self.lodge = AccommodationPlace.objects.create(name="Snow Lodge", type="self")
        self.client.force_authenticate(self.operator)
        self._seq = 0

    def add_customer(self, source="wechat", created=None):
        self._seq += 1
        customer = Customer.objects.create(name=f"Guest {self._seq}", phone=f"1370000{self._seq:04d}", source=source)
        if created:
            Customer.objects.filter(pk=customer.pk).update(created_at=aware(created))
        return customer

    def add_order(self, customer, amount, order_status=Order.Status.CONFIRMED, order_date=TODAY, created=TODAY):
        self._seq += 1
        order = Order.objects.create(
            order_number=f"ORD20250301{self._seq:04d}",
            customer=customer,
            accommodation_place=self.lodge,
            order_date=order_date,
            visit_date=order_date,
            people_count=2,
            total_amount=Decimal(amount),
            status=order_status,
        )
        Order.objects.filter(pk=order.pk).update(created_at=aware(created))
        return order


class OverviewStatsTests(DashboardTestMixin, APITestCase):
    def setUp(self):
        super().setUp()
        march = self.add_customer(created=date(2025, 3, 2))
        february = self.add_customer(created=date(2025, 2, 10))
        late_march = self.add_customer(created=date(2025, 3, 10))
        self.add_order(march, "300")
        self.add_order(march, "200", order_status=Order.Status.COMPLETED, order_date=date(2025, 3, 14))
        self.add_order(february, "500", order_status=Order.Status.PENDING)
        self.add_order(february, "400", order_date=date(2025, 2, 20), created=date(2025, 2, 20))
        self.add_order(late_march, "1000", order_status=Order.Status.CANCELLED)

    def test_overview_numbers(self):
        stats = services.overview_stats(today=TODAY)
        self.assertEqual(stats["today_revenue"], {"value": 300.0, "growth": 50.0})
        self.assertEqual(stats["month_revenue"], {"value": 500.0, "growth": 25.0})
        self.assertEqual(stats["total_orders"], {"value": 5, "growth": 300.0, "new_count": 4})
        self.assertEqual(stats["total_customers"], {"value": 3, "growth": 100.0, "new_count": 2})

    def test_growth_without_previous_period(self):
        stats = services.overview_stats(today=date(2025, 5, 1))
        self.assertEqual(stats["today_revenue"], {"value": 0.0, "growth": 0.0})
        self.assertEqual(stats["total_orders"]["growth"], 0.0)

    def test_stats_endpoint(self):
        response = self.client.get(reverse("dashboard-stats"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            set(response.json()["data"]), {"today_revenue", "month_revenue", "total_orders", "total_customers"}
        )
        self.assertEqual(response.json()["data"]["total_orders"]["value"], 5)

    def test_coach_is_forbidden(self):
        self.client.force_authenticate(self.coach)
        self.assertEqual(self.client.get(reverse("dashboard-stats")).status_code, status.HTTP_403_FORBIDDEN)


class RevenueTrendTests(DashboardTestMixin, APITestCase):
    def test_zero_filled_trend(self):
        customer = self.add_customer()
        self.add_order(customer, "300")
        self.add_order(customer, "50.5")
        self.add_order(customer, "200", order_status=Order.Status.COMPLETED, order_date=date(2025, 3, 13))
        self.add_order(customer, "999", order_status=Order.Status.PENDING, order_date=date(2025, 3, 14))

        trend = services.revenue_trend(3, today=TODAY)
        self.assertEqual(
            trend,
            [
                {"date": date(2025, 3, 13), "revenue": 200.0},
                {"date": date(2025, 3, 14), "revenue": 0.0},
                {"date": date(2025, 3, 15), "revenue": 350.5},
            ],
        )

    def test_days_parameter(self):
        data = self.client.get(reverse("dashboard-revenue-trend")).json()["data"]
        self.assertEqual(len(data), 30)
        self.assertEqual(data[-1]["date"], timezone.localdate().isoformat())

        data = self.client.get(reverse("dashboard-revenue-trend"), {"days": 7}).json()["data"]
        self.assertEqual(len(data), 7)

        for days in (0, 366, "abc"):
            response = self.client.get(reverse("dashboard-revenue-trend"), {"days": days})
            self.assertEqual(response.json()["error"]["code"], "VALIDATION_ERROR")


class DistributionTests(DashboardTestMixin, APITestCase):
    def test_order_status(self):
        customer = self.add_customer()
        self.add_order(customer, "100")
        self.add_order(customer, "100")
        self.add_order(customer, "100", order_status=Order.Status.CANCELLED)

        data = self.client.get(reverse("dashboard-order-status")).json()["data"]
        self.assertEqual(
            data,
            [
                {"status": "cancelled", "label": "已取消", "value": 1, "color": "#EF4444"},
                {"status": "confirmed", "label": "已确认", "value": 2, "color": "#3B82F6"},
            ],
        )

    def test_customer_source(self):
        self.add_customer(source="douyin")
        self.add_customer(source="douyin")
        self.add_customer(source="xiaohongshu")

        data = self.client.get(reverse("dashboard-customer-source")).json()["data"]
        self.assertEqual(data[0], {"source": "douyin", "label": "抖音", "value": 2, "color": "#000000"})
        self.assertEqual(data[1]["label"], "小红书")

    def test_project_ranking(self):
        ski = Project.objects.create(name="Skiing", price=Decimal("200"))
        sled = Project.objects.create(name="Dog sled", price=Decimal("300"))
        customer = self.add_customer()
        for quantity in (1, 3):
            order = self.add_order(customer, "100")
            OrderItem.objects.create(order=order, project=ski, quantity=quantity, unit_price=Decimal("200"))
        order = self.add_order(customer, "100")
        OrderItem.objects.create(order=order, project=sled, quantity=5, unit_price=Decimal("300"))

        data = self.client.get(reverse("dashboard-project-ranking")).json()["data"]
        self.assertEqual(
            data,
            [
                {"project_id": ski.id, "name": "Skiing", "count": 2, "quantity": 4},
                {"project_id": sled.id, "name": "Dog sled", "count": 1, "quantity": 5},
            ],
        )

        data = self.client.get(reverse("dashboard-project-ranking"), {"limit": 1}).json()["data"]
        self.assertEqual(len(data), 1)
