"""Customer aggregates kept in sync with orders."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from django.db.models import Avg, Count, F, Sum  # type: ignore
from django.db.models.functions import Greatest  # type: ignore

from .models import Customer

logger = logging.getLogger(__name__)


def find_or_create_customer(
    name: str, phone: str, wechat: str | None = None, source: str = Customer.Source.BOOKING_FORM
) -> Customer:
    """Match a booking to a customer by phone, creating one when unknown."""
    customer = Customer.objects.filter(phone=phone).first()
    if customer is None:
        customer = Customer.objects.create(name=name, phone=phone, wechat=wechat or "", source=source)
        logger.info("Customer %s created from %s", customer.pk, source)
        return customer
    if wechat and not customer.wechat:
        customer.wechat = wechat
        customer.save(update_fields=["wechat", "updated_at"])
    return customer


def record_visit(customer: Customer, amount: Decimal, visit_date: date) -> None:
    """Count a new order toward the customer's totals."""
    updates = {
        "total_spent": F("total_spent") + amount,
        "visit_count": F("visit_count") + 1,
        "last_visit_date": visit_date,
    }
    if customer.first_visit_date is None:
        updates["first_visit_date"] = visit_date
    Customer.objects.filter(pk=customer.pk).update(**updates)
    customer.refresh_from_db(fields=["total_spent", "visit_count", "last_visit_date", "first_visit_date"])


def revert_visit(customer: Customer, amount: Decimal) -> None:
    """Undo ``record_visit`` for a cancelled or deleted order."""
    Customer.objects.filter(pk=customer.pk).update(
        total_spent=Greatest(F("total_spent") - amount, Decimal("0")),
        visit_count=Greatest(F("visit_count") - 1, 0),
    )
    customer.refresh_from_db(fields=["total_spent", "visit_count"])


def customer_stats() -> dict:
    totals = Customer.objects.aggregate(
        total_customers=Count("id"),
        spent_sum=Sum("total_spent"),
        spent_avg=Avg("total_spent"),
    )
    distribution = (
        Customer.objects.values("source").annotate(count=Count("id")).order_by("-count")
    )
    return {
        "total_customers": totals["total_customers"],
        "total_spent": totals["spent_sum"] or Decimal("0"),
        "average_spent": round(totals["spent_avg"] or Decimal("0"), 2),
        "source_distribution": list(distribution),
    }
