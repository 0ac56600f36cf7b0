from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.urls import reverse  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.test import APITestCase  # type: ignore

from apps.accommodations.models import AccommodationPlace
from apps.customers.models import Customer
from apps.orders.models import Order
from apps.shuttle.models import Driver, ShuttleSchedule, ShuttleStop, Vehicle
from apps.shuttle.services import vehicle_needs
from apps.shuttle.tasks import complete_past_schedules
from apps.users.models import User

DAY = date(2025, 1, 25)


class ShuttleTestMixin:
    def setUp(self):
        self.admin = User.objects.create_user(username="admin", password="pass12345", role=User.RoleChoices.ADMIN)
        self.operator = User.objects.create_user(username="op", password="pass12345", role=User.RoleChoices.OPERATOR)
        self.driver_user = User.objects.create_user(
            username="driver", password="pass12345", role=User.RoleChoices.DRIVER
        )
        self.lodge = AccommodationPlace.objects.create(name="Snow Lodge", type="self")
        self.resort = AccommodationPlace.objects.create(name="Wanda Resort", type="external", distance=Decimal("12.5"))
        self.bus = Vehicle.objects.create(plate_number="吉H12345", vehicle_type="大巴", seats=45)
        self.van = Vehicle.objects.create(plate_number="吉H67890", vehicle_type="商务车", seats=7)
        self.driver = Driver.objects.create(name="Driver Zhao", phone="13800000011")
        self.client.force_authenticate(self.operator)
        self._order_seq = 0

    def add_order(self, place, people, order_status=Order.Status.CONFIRMED, visit_date=DAY):
        self._order_seq += 1
        customer = Customer.objects.create(
            name=f"Guest {self._order_seq}", phone=f"1390000{self._order_seq:04d}", source="wechat"
        )
        return Order.objects.create(
            order_number=f"ORD20250101{self._order_seq:04d}",
            customer=customer,
            accommodation_place=place,
            visit_date=visit_date,
            people_count=people,
            total_amount=Decimal("100") * people,
            status=order_status,
        )

    def payload(self, **overrides):
        data = {
            "date": DAY.isoformat(),
            "batch_name": "Morning pickup",
            "vehicle_id": self.bus.id,
            "driver_id": self.driver.id,
            "departure_time": "08:00",
            "stops": [
                {"accommodation_place_id": self.resort.id, "stop_order": 1, "passenger_count": 6},
                {"accommodation_place_id": self.lodge.id, "stop_order": 2, "passenger_count": 4},
            ],
        }
        data.update(overrides)
        return data

    def create(self, **overrides):
        return self.client.post(reverse("shuttle-schedule-list"), self.payload(**overrides), format="json")


class VehicleNeedsTests(APITestCase):
    def test_greedy_estimate(self):
        self.assertEqual(vehicle_needs(0), {"buses": 0, "minibuses": 0, "vans": 0})
        self.assertEqual(vehicle_needs(45), {"buses": 1, "minibuses": 0, "vans": 0})
        self.assertEqual(vehicle_needs(72), {"buses": 1, "minibuses": 1, "vans": 1})
        self.assertEqual(vehicle_needs(8), {"buses": 0, "minibuses": 0, "vans": 2})


class DailyStatsTests(ShuttleTestMixin, APITestCase):
    def test_groups_demand_by_accommodation(self):
        self.add_order(self.lodge, 3)
        self.add_order(self.resort, 6, order_status=Order.Status.PENDING)
        self.add_order(self.resort, 2)
        self.add_order(self.resort, 10, order_status=Order.Status.CANCELLED)
        self.add_order(self.lodge, 5, visit_date=DAY + timedelta(days=1))
        schedule = ShuttleSchedule.objects.create(
            date=DAY, batch_name="Early", vehicle=self.van, driver=self.driver, departure_time="07:30"
        )
        ShuttleStop.objects.create(schedule=schedule, accommodation_place=self.resort, passenger_count=4)

        self.client.force_authenticate(self.driver_user)
        response = self.client.get(reverse("shuttle-daily-stats"), {"date": DAY.isoformat()})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()["data"]
        self.assertEqual(data["total_orders"], 3)
        self.assertEqual(data["total_people"], 11)
        self.assertEqual(data["assigned_people"], 4)
        self.assertEqual(data["unassigned_people"], 7)
        self.assertEqual(data["vehicle_needs"], {"buses": 0, "minibuses": 0, "vans": 1})
        first = data["accommodation_stats"][0]
        self.assertEqual(first["accommodation_place"]["name"], "Wanda Resort")
        self.assertEqual(first["order_count"], 2)
        self.assertEqual(first["total_people"], 8)
        self.assertEqual(len(data["existing_schedules"]), 1)
        self.assertEqual(data["existing_schedules"][0]["stops"][0]["passenger_count"], 4)

    def test_date_is_required(self):
        response = self.client.get(reverse("shuttle-daily-stats"))
        self.assertEqual(response.json()["error"]["code"], "VALIDATION_ERROR")


class ShuttleScheduleCreateTests(ShuttleTestMixin, APITestCase):
    def test_create_with_stops(self):
        response = self.create()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.json()["data"]
        self.assertEqual(data["status"], "pending")
        self.assertEqual(data["passenger_count"], 10)
        self.assertEqual([stop["accommodation_place_name"] for stop in data["stops"]], ["Wanda Resort", "Snow Lodge"])

    def test_stops_are_required(self):
        response = self.create(stops=[])
        self.assertEqual(response.json()["error"]["code"], "VALIDATION_ERROR")

    def test_checks_run_in_order(self):
        self.bus.status = Vehicle.Status.MAINTENANCE
        self.bus.save()
        self.driver.status = Driver.Status.ON_LEAVE
        self.driver.save()

        self.assertEqual(self.create(vehicle_id=999).json()["error"]["code"], "VEHICLE_NOT_FOUND")
        self.assertEqual(self.create().json()["error"]["code"], "VEHICLE_UNAVAILABLE")
        self.assertEqual(self.create(vehicle_id=self.van.id, driver_id=999).json()["error"]["code"], "DRIVER_NOT_FOUND")
        self.assertEqual(self.create(vehicle_id=self.van.id).json()["error"]["code"], "DRIVER_UNAVAILABLE")

        self.driver.status = Driver.Status.ON_DUTY
        self.driver.save()
        stops = [{"accommodation_place_id": 999, "passenger_count": 1}]
        response = self.create(vehicle_id=self.van.id, stops=stops)
        self.assertEqual(response.json()["error"]["code"], "ACCOMMODATION_NOT_FOUND")

        response = self.create(vehicle_id=self.van.id)
        self.assertEqual(response.json()["error"]["code"], "CAPACITY_EXCEEDED")

    def test_vehicle_or_driver_conflict(self):
        self.assertEqual(self.create().status_code, status.HTTP_201_CREATED)
        other_driver = Driver.objects.create(name="Driver Qian", phone="13800000012")
        response = self.create(driver_id=other_driver.id)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.json()["error"]["code"], "SCHEDULE_CONFLICT")

        ShuttleSchedule.objects.update(status=ShuttleSchedule.Status.COMPLETED)
        self.assertEqual(self.create(driver_id=other_driver.id).status_code, status.HTTP_201_CREATED)

    def test_driver_cannot_create(self):
        self.client.force_authenticate(self.driver_user)
        self.assertEqual(self.create().status_code, status.HTTP_403_FORBIDDEN)


class ShuttleScheduleLifecycleTests(ShuttleTestMixin, APITestCase):
    def setUp(self):
        super().setUp()
        self.schedule_id = self.create().json()["data"]["id"]

    def test_stops_list_customers(self):
        self.add_order(self.resort, 4)
        self.add_order(self.resort, 2, order_status=Order.Status.PENDING)
        self.add_order(self.lodge, 3)
        data = self.client.get(reverse("shuttle-schedule-stops", args=[self.schedule_id])).json()["data"]
        self.assertEqual(data["schedule"]["batch_name"], "Morning pickup")
        resort_stop, lodge_stop = data["stops"]
        self.assertEqual(len(resort_stop["customers"]), 1)
        self.assertEqual(resort_stop["customers"][0]["people_count"], 4)
        self.assertEqual(lodge_stop["customers"][0]["customer"]["name"], "Guest 3")

    def test_status_flow(self):
        url = reverse("shuttle-schedule-change-status", args=[self.schedule_id])
        self.client.force_authenticate(self.driver_user)
        response = self.client.patch(url, {"status": "in_progress"}, format="json")
        self.assertEqual(response.json()["data"]["status"], "in_progress")

        response = self.client.patch(url, {"status": "parked"}, format="json")
        self.assertEqual(response.json()["error"]["code"], "INVALID_STATUS")

        response = self.client.patch(url, {"status": "completed", "return_time": "12:30"}, format="json")
        self.assertEqual(response.json()["data"]["return_time"], "12:30:00")

        response = self.client.patch(url, {"status": "pending"}, format="json")
        self.assertEqual(response.json()["error"]["code"], "INVALID_STATUS_TRANSITION")

    def test_delete_only_pending(self):
        url = reverse("shuttle-schedule-detail", args=[self.schedule_id])
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        ShuttleSchedule.objects.filter(pk=self.schedule_id).update(status=ShuttleSchedule.Status.IN_PROGRESS)
        self.assertEqual(self.client.delete(url).json()["error"]["code"], "CANNOT_DELETE_SCHEDULE")

        ShuttleSchedule.objects.filter(pk=self.schedule_id).update(status=ShuttleSchedule.Status.PENDING)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(ShuttleStop.objects.exists())

    def test_list_filters(self):
        data = self.client.get(reverse("shuttle-schedule-list"), {"date": DAY.isoformat()}).json()["data"]
        self.assertEqual(data["total"], 1)
        data = self.client.get(reverse("shuttle-schedule-list"), {"driver_id": 999}).json()["data"]
        self.assertEqual(data["total"], 0)

    def test_complete_past_schedules_task(self):
        self.assertLess(DAY, timezone.localdate())
        self.assertEqual(complete_past_schedules(), {"completed": 1})
        self.assertEqual(ShuttleSchedule.objects.get().status, ShuttleSchedule.Status.COMPLETED)


class FleetApiTests(ShuttleTestMixin, APITestCase):
    def test_vehicle_crud_and_duplicate_plate(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            reverse("vehicle-list"), {"plate_number": "吉H11111", "vehicle_type": "中巴", "seats": 20}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.client.post(
            reverse("vehicle-list"), {"plate_number": "吉H12345", "vehicle_type": "大巴", "seats": 45}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.json()["error"]["code"], "DUPLICATE_PLATE_NUMBER")

        url = reverse("vehicle-detail", args=[self.van.id])
        response = self.client.patch(url, {"plate_number": "吉H12345"}, format="json")
        self.assertEqual(response.json()["error"]["code"], "DUPLICATE_PLATE_NUMBER")
        response = self.client.patch(url, {"status": "maintenance"}, format="json")
        self.assertEqual(response.json()["data"]["status"], "maintenance")

    def test_vehicle_filters_and_roles(self):
        self.client.force_authenticate(self.driver_user)
        data = self.client.get(reverse("vehicle-list"), {"vehicle_type": "大巴"}).json()["data"]
        self.assertEqual([vehicle["plate_number"] for vehicle in data["items"]], ["吉H12345"])
        response = self.client.post(reverse("vehicle-list"), {"plate_number": "X", "vehicle_type": "Y", "seats": 1})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_drivers(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            reverse("driver-list"),
            {"name": "Driver Sun", "phone": "13800000013", "user_id": self.driver_user.id},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.json()["data"]["status"], "on_duty")

        response = self.client.patch(
            reverse("driver-detail", args=[self.driver.id]), {"status": "off_duty"}, format="json"
        )
        self.assertEqual(response.json()["data"]["status"], "off_duty")

        data = self.client.get(reverse("driver-list"), {"status": "on_duty"}).json()["data"]
        self.assertEqual([driver["name"] for driver in data["items"]], ["Driver Sun"])
