"""Domain services for booking workflows."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from django.db import transaction  # type: ignore
from django.db.models import Count  # type: ignore
from django.utils import timezone  # type: ignore

from apps.accommodations.models import AccommodationPlace
from apps.accommodations.services import find_by_name, find_or_create_by_name
from apps.customers.models import Customer
from apps.customers.services import find_or_create_customer, record_visit
from apps.orders.models import Order
from apps.orders.services import generate_order_number, payment_status_for
from apps.packages.services import get_package_for_sale, price_for_date
from apps.siteconfig.services import get_camp_info
from shared.exceptions import ServiceError

from .models import Booking

logger = logging.getLogger(__name__)

WEEKDAYS = ("周一", "周二", "周三", "周四", "周五", "周六", "周日")


def generate_booking_code(visit_date: date) -> str:
    """``BK{visit date}{NNN}``: the day's booking count plus one."""
    prefix = f"BK{visit_date:%Y%m%d}"
    sequence = Booking.objects.filter(booking_code__startswith=prefix).count() + 1
    # deleted bookings leave gaps in the count, skip codes still taken
    while Booking.objects.filter(booking_code=f"{prefix}{sequence:03d}").exists():
        sequence += 1
    return f"{prefix}{sequence:03d}"


def format_visit_date(visit_date: date) -> str:
    return f"{visit_date:%Y-%m-%d}（{WEEKDAYS[visit_date.weekday()]}）"


def status_text(status: str) -> str:
    return str(Booking.Status(status).label) if status in Booking.Status.values else status


def confirm_text(booking: Booking) -> str:
    """Plain-text summary operators paste into WeChat to confirm a booking."""
    camp_name = get_camp_info().get("name", "")
    room = f"，房间：{booking.room_number}" if booking.room_number else ""
    return (
        f"预定{camp_name}活动\n"
        f"日期：{booking.visit_date:%Y-%m-%d}\n"
        f"姓名：{booking.customer_name}，人数：{booking.people_count}人，手机：{booking.customer_phone}\n"
        f"酒店：{booking.hotel_name}{room}\n"
        f"单价：{booking.unit_price}/人，总金额{booking.total_amount}元\n"
        f"已收定金：{booking.deposit_amount}元，待收尾款{booking.balance_due}元"
    )


def resolve_hotel(hotel_id: int | None, hotel_name: str) -> AccommodationPlace | None:
    hotel = None
    if hotel_id:
        hotel = AccommodationPlace.objects.filter(pk=hotel_id).first()
    if hotel is None:
        hotel = find_by_name(hotel_name)
    return hotel


@transaction.atomic
def create_booking(
    *,
    customer_name: str,
    customer_phone: str,
    visit_date: date,
    people_count: int,
    hotel_name: str,
    child_count: int = 0,
    customer_wechat: str = "",
    hotel_id: int | None = None,
    room_number: str = "",
    package_id: int | None = None,
    customer_notes: str = "",
    operator_notes: str = "",
    source: str = Booking.Source.WECHAT_FORM,
) -> Booking:
    package = get_package_for_sale(package_id) if package_id else None
    if package is not None:
        price = price_for_date(package, visit_date, people_count, child_count)
        unit_price, child_price, total_amount = price.unit_price, price.child_price, price.total_amount
    else:
        unit_price = child_price = total_amount = Decimal("0")

    customer = find_or_create_customer(
        customer_name, customer_phone, customer_wechat, source=Customer.Source.BOOKING_FORM
    )
    booking = Booking.objects.create(
        booking_code=generate_booking_code(visit_date),
        customer_name=customer_name,
        customer_phone=customer_phone,
        customer_wechat=customer_wechat or "",
        customer=customer,
        visit_date=visit_date,
        people_count=people_count,
        child_count=child_count,
        hotel=resolve_hotel(hotel_id, hotel_name),
        hotel_name=hotel_name,
        room_number=room_number or "",
        package=package,
        package_name=package.name if package else "",
        unit_price=unit_price,
        child_price=child_price,
        total_amount=total_amount,
        customer_notes=customer_notes or "",
        operator_notes=operator_notes or "",
        source=source,
        status=Booking.Status.PENDING,
    )
    logger.info(
        "Booking %s created from %s for %s people on %s",
        booking.booking_code,
        source,
        people_count,
        visit_date,
    )
    return booking


def change_status(booking: Booking, status: str, operator_notes: str | None = None) -> Booking:
    if status not in Booking.Status.values:
        raise ServiceError(f"Unknown booking status {status!r}.", code="INVALID_STATUS")
    if status == Booking.Status.CONVERTED and booking.status != Booking.Status.CONVERTED:
        raise ServiceError(
            "Use the convert endpoint to turn a booking into an order.", code="INVALID_STATUS_TRANSITION"
        )
    previous = booking.status
    booking.status = status
    fields = ["status", "updated_at"]
    if operator_notes is not None:
        booking.operator_notes = operator_notes
        fields.append("operator_notes")
    booking.save(update_fields=fields)
    logger.info("Booking %s status %s -> %s", booking.booking_code, previous, status)
    return booking


def update_deposit(booking: Booking, deposit_amount: Decimal, deposit_collector: str | None = None) -> Booking:
    booking.deposit_amount = deposit_amount
    if deposit_collector is not None:
        booking.deposit_collector = deposit_collector
    booking.deposit_paid_at = timezone.now() if deposit_amount > 0 else None
    booking.save(update_fields=["deposit_amount", "deposit_collector", "deposit_paid_at", "updated_at"])
    return booking


@transaction.atomic
def convert_to_order(booking: Booking, created_by=None) -> Order:
    """Create a confirmed order from the booking, crediting the deposit as paid."""
    booking = Booking.objects.select_for_update().get(pk=booking.pk)
    if booking.status == Booking.Status.CONVERTED:
        raise ServiceError("This booking has already been converted.", code="ALREADY_CONVERTED")
    if booking.status == Booking.Status.CANCELLED:
        raise ServiceError("A cancelled booking cannot be converted.", code="INVALID_STATUS_TRANSITION")

    customer = booking.customer or find_or_create_customer(
        booking.customer_name, booking.customer_phone, booking.customer_wechat
    )
    place = booking.hotel or find_or_create_by_name(booking.hotel_name)
    paid = booking.deposit_amount
    order = Order.objects.create(
        order_number=generate_order_number(),
        customer=customer,
        accommodation_place=place,
        room_number=booking.room_number,
        package=booking.package,
        booking=booking,
        visit_date=booking.visit_date,
        people_count=booking.people_count,
        total_amount=booking.total_amount,
        paid_amount=paid,
        status=Order.Status.CONFIRMED,
        payment_status=payment_status_for(paid, booking.total_amount),
        notes=booking.customer_notes,
        created_by=created_by,
    )
    booking.status = Booking.Status.CONVERTED
    booking.customer = customer
    booking.hotel = place
    booking.save(update_fields=["status", "customer", "hotel", "updated_at"])
    record_visit(customer, booking.total_amount, booking.visit_date)
    logger.info("Booking %s converted to order %s", booking.booking_code, order.order_number)
    return order


def delete_booking(booking: Booking) -> None:
    if booking.status == Booking.Status.CONVERTED:
        raise ServiceError("A converted booking cannot be deleted.", code="CANNOT_DELETE_CONVERTED")
    logger.info("Booking %s deleted", booking.booking_code)
    booking.delete()


def booking_stats() -> dict[str, Any]:
    today = timezone.localdate()
    distribution = Booking.objects.values("status").annotate(count=Count("id")).order_by("status")
    return {
        "total_bookings": Booking.objects.count(),
        "today_bookings": Booking.objects.filter(created_at__date=today).count(),
        "pending_bookings": Booking.objects.filter(status=Booking.Status.PENDING).count(),
        "status_distribution": list(distribution),
    }


def expire_stale_bookings(today: date | None = None) -> int:
    """Cancel pending bookings whose visit date has passed."""
    today = today or timezone.localdate()
    return Booking.objects.filter(status=Booking.Status.PENDING, visit_date__lt=today).update(
        status=Booking.Status.CANCELLED, updated_at=timezone.now()
    )
