"""Shuttle planning: daily pickup demand and batch scheduling."""

from __future__ import annotations

import logging
import math
from datetime import date, time
from typing import Any, Iterable

from django.db import transaction  # type: ignore
from django.db.models import Q, Sum  # type: ignore
from django.utils import timezone  # type: ignore

from apps.accommodations.models import AccommodationPlace
from apps.orders.models import Order
from shared.exceptions import ConflictError, NotFoundError, ServiceError

from .models import Driver, ShuttleSchedule, ShuttleStop, Vehicle

logger = logging.getLogger(__name__)

DEMAND_STATUSES = (Order.Status.PENDING, Order.Status.CONFIRMED, Order.Status.COMPLETED)
# seat counts of the fleet sizes used for the estimate, largest first
BUS_SEATS = 45
MINIBUS_SEATS = 20
VAN_SEATS = 7


def vehicle_needs(people: int) -> dict[str, int]:
    """Greedy fleet estimate: fill buses, then minibuses, round the rest up to vans."""
    if people <= 0:
        return {"buses": 0, "minibuses": 0, "vans": 0}
    buses, remaining = divmod(people, BUS_SEATS)
    minibuses, remaining = divmod(remaining, MINIBUS_SEATS)
    return {"buses": buses, "minibuses": minibuses, "vans": math.ceil(remaining / VAN_SEATS)}


def _order_entry(order: Order) -> dict[str, Any]:
    return {
        "order_id": order.id,
        "order_number": order.order_number,
        "customer": {"id": order.customer.id, "name": order.customer.name, "phone": order.customer.phone},
        "people_count": order.people_count,
        "room_number": order.room_number,
    }


def daily_stats(on_date: date) -> dict[str, Any]:
    """Pickup demand for one day grouped by accommodation, against what is already assigned."""
    orders = Order.objects.filter(visit_date=on_date, status__in=DEMAND_STATUSES).select_related(
        "customer", "accommodation_place"
    )

    groups: dict[int, dict[str, Any]] = {}
    total_people = 0
    for order in orders:
        place = order.accommodation_place
        group = groups.setdefault(
            place.id,
            {
                "accommodation_place": {
                    "id": place.id,
                    "name": place.name,
                    "type": place.type,
                    "distance": place.distance,
                    "duration": place.duration,
                },
                "order_count": 0,
                "total_people": 0,
                "customers": [],
            },
        )
        group["order_count"] += 1
        group["total_people"] += order.people_count
        group["customers"].append(_order_entry(order))
        total_people += order.people_count

    schedules = ShuttleSchedule.objects.filter(date=on_date)
    assigned = ShuttleStop.objects.filter(schedule__date=on_date).aggregate(total=Sum("passenger_count"))["total"]
    assigned = assigned or 0
    unassigned = total_people - assigned
    return {
        "date": on_date,
        "total_orders": len(orders),
        "total_people": total_people,
        "assigned_people": assigned,
        "unassigned_people": unassigned,
        "accommodation_stats": sorted(groups.values(), key=lambda group: group["total_people"], reverse=True),
        "existing_schedules": schedules,
        "vehicle_needs": vehicle_needs(unassigned),
    }


@transaction.atomic
def create_schedule(
    *,
    date: date,
    batch_name: str,
    vehicle_id: int,
    driver_id: int,
    departure_time: time,
    stops: Iterable[dict[str, Any]],
    return_time: time | None = None,
    notes: str = "",
) -> ShuttleSchedule:
    stops = list(stops)
    vehicle = Vehicle.objects.filter(pk=vehicle_id).first()
    if vehicle is None:
        raise NotFoundError("Vehicle not found.", code="VEHICLE_NOT_FOUND")
    if vehicle.status == Vehicle.Status.MAINTENANCE:
        raise ServiceError("The vehicle is under maintenance.", code="VEHICLE_UNAVAILABLE")

    driver = Driver.objects.filter(pk=driver_id).first()
    if driver is None:
        raise NotFoundError("Driver not found.", code="DRIVER_NOT_FOUND")
    if driver.status != Driver.Status.ON_DUTY:
        raise ServiceError("The driver is not on duty.", code="DRIVER_UNAVAILABLE")

    place_ids = {stop["accommodation_place_id"] for stop in stops}
    places = AccommodationPlace.objects.in_bulk(place_ids)
    missing = sorted(place_ids - places.keys())
    if missing:
        raise NotFoundError(
            f"Accommodation {missing[0]} not found.",
            code="ACCOMMODATION_NOT_FOUND",
            details={"accommodation_place_ids": missing},
        )

    busy = (
        ShuttleSchedule.objects.filter(date=date)
        .filter(Q(vehicle=vehicle) | Q(driver=driver))
        .exclude(status=ShuttleSchedule.Status.COMPLETED)
    )
    if busy.exists():
        raise ConflictError(
            "The vehicle or driver already has an unfinished schedule on this date.", code="SCHEDULE_CONFLICT"
        )

    passengers = sum(stop["passenger_count"] for stop in stops)
    if passengers > vehicle.seats:
        raise ServiceError(
            f"{passengers} passengers exceed the {vehicle.seats} seats of {vehicle.plate_number}.",
            code="CAPACITY_EXCEEDED",
            details={"passenger_count": passengers, "seats": vehicle.seats},
        )

    schedule = ShuttleSchedule.objects.create(
        date=date,
        batch_name=batch_name,
        vehicle=vehicle,
        driver=driver,
        departure_time=departure_time,
        return_time=return_time,
        notes=notes or "",
    )
    ShuttleStop.objects.bulk_create(
        ShuttleStop(
            schedule=schedule,
            accommodation_place=places[stop["accommodation_place_id"]],
            stop_order=stop.get("stop_order") or position,
            passenger_count=stop["passenger_count"],
        )
        for position, stop in enumerate(stops, start=1)
    )
    logger.info(
        "Shuttle schedule %s (%s) created on %s: vehicle %s, driver %s, %s passengers",
        schedule.pk,
        batch_name,
        date,
        vehicle.plate_number,
        driver.name,
        passengers,
    )
    return schedule


def stops_with_customers(schedule: ShuttleSchedule) -> list[dict[str, Any]]:
    """Each stop of ``schedule`` with the confirmed guests staying there that day."""
    stops = list(schedule.stops.select_related("accommodation_place"))
    orders = Order.objects.filter(
        visit_date=schedule.date,
        status__in=Order.REVENUE_STATUSES,
        accommodation_place_id__in=[stop.accommodation_place_id for stop in stops],
    ).select_related("customer")
    by_place: dict[int, list[dict[str, Any]]] = {}
    for order in orders:
        by_place.setdefault(order.accommodation_place_id, []).append(_order_entry(order))
    return [
        {
            "id": stop.id,
            "stop_order": stop.stop_order,
            "passenger_count": stop.passenger_count,
            "accommodation_place": {
                "id": stop.accommodation_place.id,
                "name": stop.accommodation_place.name,
                "address": stop.accommodation_place.address,
            },
            "customers": by_place.get(stop.accommodation_place_id, []),
        }
        for stop in stops
    ]


def change_status(schedule: ShuttleSchedule, status: str, return_time: time | None = None) -> ShuttleSchedule:
    if status not in ShuttleSchedule.Status.values:
        raise ServiceError(f"Unknown shuttle status {status!r}.", code="INVALID_STATUS")
    if schedule.status == ShuttleSchedule.Status.COMPLETED:
        raise ServiceError("A completed schedule cannot change.", code="INVALID_STATUS_TRANSITION")
    schedule.status = status
    fields = ["status", "updated_at"]
    if status == ShuttleSchedule.Status.COMPLETED and return_time is not None:
        schedule.return_time = return_time
        fields.append("return_time")
    schedule.save(update_fields=fields)
    logger.info("Shuttle schedule %s moved to %s", schedule.pk, status)
    return schedule


def delete_schedule(schedule: ShuttleSchedule) -> None:
    if schedule.status != ShuttleSchedule.Status.PENDING:
        raise ServiceError("Only pending schedules can be deleted.", code="CANNOT_DELETE_SCHEDULE")
    logger.info("Shuttle schedule %s deleted", schedule.pk)
    schedule.delete()


def complete_past_schedules(today: date | None = None) -> int:
    """Close schedules of earlier days that were never marked completed."""
    today = today or timezone.localdate()
    return (
        ShuttleSchedule.objects.filter(date__lt=today)
        .exclude(status=ShuttleSchedule.Status.COMPLETED)
        .update(status=ShuttleSchedule.Status.COMPLETED, updated_at=timezone.now())
    )
