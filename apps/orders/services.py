"""
Order lifecycle: numbering, pricing, status transitions and payments.

All write paths run inside ``transaction.atomic`` so the order, its items and
the customer's visit counters change together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from django.db import transaction  # type: ignore
from django.db.models import Count, Q, Sum  # type: ignore
from django.utils import timezone  # type: ignore

from apps.accommodations.models import AccommodationPlace
from apps.customers.models import Customer
from apps.customers.services import record_visit, revert_visit
from apps.packages.models import Package
from apps.packages.services import get_package_for_sale
from apps.projects.models import Project
from shared.exceptions import NotFoundError, ServiceError

from .models import Order, OrderItem

logger = logging.getLogger(__name__)


@dataclass
class OrderAmount:
    total_amount: Decimal
    package: Package | None = None
    package_amount: Decimal = Decimal("0")
    items_amount: Decimal = Decimal("0")
    items: list[dict[str, Any]] = field(default_factory=list)


def generate_order_number(on: date | None = None) -> str:
    """
    Next ``ORD{YYYYMMDD}{NNNN}`` number for the day.

    Must run inside a transaction: the last row of the day is locked so two
    concurrent creates cannot draw the same sequence.
    """
    prefix = f"ORD{(on or timezone.localdate()):%Y%m%d}"
    last = (
        Order.objects.select_for_update()
        .filter(order_number__startswith=prefix)
        .order_by("-order_number")
        .values_list("order_number", flat=True)
        .first()
    )
    sequence = int(last[-4:]) + 1 if last else 1
    return f"{prefix}{sequence:04d}"


def payment_status_for(paid_amount: Decimal, total_amount: Decimal) -> str:
    if paid_amount > 0 and paid_amount >= total_amount:
        return Order.PaymentStatus.PAID
    if paid_amount > 0:
        return Order.PaymentStatus.PARTIAL
    return Order.PaymentStatus.UNPAID


def _active_project(project_id: int) -> Project:
    project = Project.objects.filter(pk=project_id).first()
    if project is None:
        raise NotFoundError(f"Project {project_id} does not exist.", code="PROJECT_NOT_FOUND")
    if not project.is_active:
        raise ServiceError(f'Project "{project.name}" is no longer available.', code="PROJECT_INACTIVE")
    return project


def calculate_order_amount(
    package_id: int | None, items: Iterable[dict[str, Any]], people_count: int
) -> OrderAmount:
    """
    Price an order.

    A package costs its price per person and contributes one zero-priced line
    per included project so the activities can still be scheduled. Each
    entry of ``items`` (``{"project_id", "quantity"?}``) is billed at the
    project price times its quantity, defaulting to ``people_count``; with a
    package these are extras on top of it.
    """
    result = OrderAmount(total_amount=Decimal("0"))
    if package_id:
        package = get_package_for_sale(package_id, people_count)
        result.package = package
        result.package_amount = package.price * people_count
        for package_item in package.items.select_related("project"):
            if not package_item.project.is_active:
                raise ServiceError(
                    f'Package project "{package_item.project.name}" is no longer available.',
                    code="PROJECT_INACTIVE",
                )
            result.items.append(
                {
                    "project": package_item.project,
                    "quantity": people_count,
                    "unit_price": Decimal("0"),
                    "subtotal": Decimal("0"),
                }
            )

    for item in items:
        project = _active_project(item["project_id"])
        quantity = item.get("quantity") or people_count
        subtotal = project.price * quantity
        result.items_amount += subtotal
        result.items.append(
            {"project": project, "quantity": quantity, "unit_price": project.price, "subtotal": subtotal}
        )

    if result.package is None and not result.items:
        raise ServiceError("An order needs a package or at least one project.", code="VALIDATION_ERROR")
    result.total_amount = result.package_amount + result.items_amount
    return result


@transaction.atomic
def create_order(
    *,
    customer_id: int,
    accommodation_place_id: int,
    visit_date: date,
    people_count: int,
    package_id: int | None = None,
    items: Iterable[dict[str, Any]] = (),
    room_number: str = "",
    discount_amount: Decimal = Decimal("0"),
    notes: str = "",
    created_by=None,
) -> Order:
    customer = Customer.objects.filter(pk=customer_id).first()
    if customer is None:
        raise NotFoundError("Customer not found.", code="CUSTOMER_NOT_FOUND")
    place = AccommodationPlace.objects.filter(pk=accommodation_place_id).first()
    if place is None:
        raise NotFoundError("Accommodation place not found.", code="ACCOMMODATION_NOT_FOUND")

    amount = calculate_order_amount(package_id, items, people_count)
    total = max(amount.total_amount - discount_amount, Decimal("0"))
    order = Order.objects.create(
        order_number=generate_order_number(),
        customer=customer,
        accommodation_place=place,
        package=amount.package,
        room_number=room_number,
        visit_date=visit_date,
        people_count=people_count,
        total_amount=total,
        discount_amount=discount_amount,
        notes=notes,
        created_by=created_by,
    )
    OrderItem.objects.bulk_create(OrderItem(order=order, **line) for line in amount.items)
    record_visit(customer, total, visit_date)
    logger.info("Order %s created for customer %s, total %s", order.order_number, customer.pk, total)
    return order


@transaction.atomic
def change_status(order: Order, status: str | None = None, payment_status: str | None = None) -> Order:
    if not status and not payment_status:
        raise ServiceError("Provide status or payment_status.", code="VALIDATION_ERROR")
    if status and status not in Order.Status.values:
        raise ServiceError(f"Unknown order status {status!r}.", code="INVALID_STATUS")
    if payment_status and payment_status not in Order.PaymentStatus.values:
        raise ServiceError(f"Unknown payment status {payment_status!r}.", code="INVALID_PAYMENT_STATUS")

    previous = order.status
    if status and status != previous:
        if previous == Order.Status.CANCELLED:
            raise ServiceError("A cancelled order cannot change status.", code="INVALID_STATUS_TRANSITION")
        if previous == Order.Status.COMPLETED and status != Order.Status.CANCELLED:
            raise ServiceError(
                "A completed order can only be cancelled.", code="INVALID_STATUS_TRANSITION"
            )
        order.status = status
        if status == Order.Status.CANCELLED:
            revert_visit(order.customer, order.total_amount)
    if payment_status:
        order.payment_status = payment_status
    order.save(update_fields=["status", "payment_status", "updated_at"])
    if order.status != previous:
        logger.info("Order %s status %s -> %s", order.order_number, previous, order.status)
    return order


@transaction.atomic
def apply_payment(order: Order, amount: Decimal, action: str = "add") -> Order:
    """Record money received: ``add`` to the paid amount or ``set`` it outright."""
    if order.status == Order.Status.CANCELLED:
        raise ServiceError("Payments cannot be recorded on a cancelled order.", code="INVALID_STATUS_TRANSITION")
    paid = order.paid_amount + amount if action == "add" else amount
    if paid < 0 or paid > order.total_amount:
        raise ServiceError(
            "Paid amount must stay between 0 and the order total.",
            code="INVALID_PAYMENT_AMOUNT",
            details={"total_amount": order.total_amount, "paid_amount": order.paid_amount},
        )
    order.paid_amount = paid
    order.payment_status = payment_status_for(paid, order.total_amount)
    order.save(update_fields=["paid_amount", "payment_status", "updated_at"])
    logger.info("Order %s paid amount now %s (%s)", order.order_number, paid, order.payment_status)
    return order


@transaction.atomic
def delete_order(order: Order) -> None:
    if order.status not in (Order.Status.PENDING, Order.Status.CANCELLED):
        raise ServiceError(
            "Only pending or cancelled orders can be deleted.", code="CANNOT_DELETE_ORDER"
        )
    if order.status != Order.Status.CANCELLED:
        revert_visit(order.customer, order.total_amount)
    logger.info("Order %s deleted", order.order_number)
    order.delete()


def order_stats(start_date: date | None = None, end_date: date | None = None) -> dict[str, Any]:
    orders = Order.objects.all()
    if start_date:
        orders = orders.filter(order_date__gte=start_date)
    if end_date:
        orders = orders.filter(order_date__lte=end_date)

    totals = orders.aggregate(
        total_orders=Count("id"),
        total_revenue=Sum("total_amount", filter=Q(status__in=Order.REVENUE_STATUSES)),
        paid_amount_total=Sum("paid_amount"),
    )
    status_distribution = orders.values("status").annotate(count=Count("id")).order_by("status")
    payment_distribution = (
        orders.values("payment_status").annotate(count=Count("id")).order_by("payment_status")
    )
    recent = orders.select_related("customer").order_by("-created_at")[:10]
    return {
        "total_orders": totals["total_orders"],
        "total_revenue": totals["total_revenue"] or Decimal("0"),
        "paid_amount_total": totals["paid_amount_total"] or Decimal("0"),
        "status_distribution": list(status_distribution),
        "payment_status_distribution": list(payment_distribution),
        "recent_orders": [
            {
                "id": order.id,
                "order_number": order.order_number,
                "customer_name": order.customer.name,
                "customer_phone": order.customer.phone,
                "visit_date": order.visit_date,
                "total_amount": order.total_amount,
                "status": order.status,
                "created_at": order.created_at,
            }
            for order in recent
        ],
    }
