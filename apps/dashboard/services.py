"""Aggregates behind the back-office dashboard.

Revenue is the ``total_amount`` of confirmed and completed orders, bucketed
by ``order_date``. Order and customer growth compare records created this
month against those created last month.
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from typing import Any

from django.db.models import Count, Sum  # type: ignore
from django.utils import timezone  # type: ignore

from apps.customers.models import Customer
from apps.orders.models import Order, OrderItem
from shared.utils import calculate_growth

DEFAULT_COLOR = "#6B7280"

ORDER_STATUS_DISPLAY = {
    Order.Status.PENDING: ("待处理", "#FBBF24"),
    Order.Status.CONFIRMED: ("已确认", "#3B82F6"),
    Order.Status.COMPLETED: ("已完成", "#10B981"),
    Order.Status.CANCELLED: ("已取消", "#EF4444"),
}

CUSTOMER_SOURCE_DISPLAY = {
    Customer.Source.XIAOHONGSHU: ("小红书", "#FF2442"),
    Customer.Source.WECHAT: ("微信", "#07C160"),
    Customer.Source.DOUYIN: ("抖音", "#000000"),
    Customer.Source.FRIEND: ("朋友推荐", "#8B5CF6"),
    Customer.Source.OTHER: ("其他", DEFAULT_COLOR),
    Customer.Source.BOOKING_FORM: ("预约表单", "#F59E0B"),
}


def _revenue(**filters: Any) -> Decimal:
    total = (
        Order.objects.filter(status__in=Order.REVENUE_STATUSES, **filters)
        .aggregate(total=Sum("total_amount"))["total"]
    )
    return total or Decimal("0")


def _month_bounds(today: date) -> tuple[date, date, date]:
    month_start = today.replace(day=1)
    last_month_end = month_start - timedelta(days=1)
    return month_start, last_month_end.replace(day=1), last_month_end


def overview_stats(today: date | None = None) -> dict[str, Any]:
    today = today or timezone.localdate()
    month_start, last_month_start, last_month_end = _month_bounds(today)

    today_revenue = _revenue(order_date=today)
    yesterday_revenue = _revenue(order_date=today - timedelta(days=1))
    month_revenue = _revenue(order_date__range=(month_start, today))
    last_month_revenue = _revenue(order_date__range=(last_month_start, last_month_end))

    new_orders = Order.objects.filter(created_at__date__range=(month_start, today)).count()
    last_month_orders = Order.objects.filter(created_at__date__range=(last_month_start, last_month_end)).count()
    new_customers = Customer.objects.filter(created_at__date__range=(month_start, today)).count()
    last_month_customers = Customer.objects.filter(
        created_at__date__range=(last_month_start, last_month_end)
    ).count()

    return {
        "today_revenue": {
            "value": float(today_revenue),
            "growth": calculate_growth(today_revenue, yesterday_revenue),
        },
        "month_revenue": {
            "value": float(month_revenue),
            "growth": calculate_growth(month_revenue, last_month_revenue),
        },
        "total_orders": {
            "value": Order.objects.count(),
            "growth": calculate_growth(new_orders, last_month_orders),
            "new_count": new_orders,
        },
        "total_customers": {
            "value": Customer.objects.count(),
            "growth": calculate_growth(new_customers, last_month_customers),
            "new_count": new_customers,
        },
    }


def revenue_trend(days: int, today: date | None = None) -> list[dict[str, Any]]:
    """Daily revenue for the last ``days`` days, oldest first, with empty days as zero."""
    today = today or timezone.localdate()
    start = today - timedelta(days=days - 1)
    totals = dict(
        Order.objects.filter(status__in=Order.REVENUE_STATUSES, order_date__range=(start, today))
        .order_by()
        .values("order_date")
        .annotate(total=Sum("total_amount"))
        .values_list("order_date", "total")
    )
    trend = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        trend.append({"date": day, "revenue": float(totals.get(day) or 0)})
    return trend


def order_status_distribution() -> list[dict[str, Any]]:
    rows = Order.objects.values("status").annotate(value=Count("id")).order_by("status")
    result = []
    for row in rows:
        label, color = ORDER_STATUS_DISPLAY.get(row["status"], (row["status"], DEFAULT_COLOR))
        result.append({"status": row["status"], "label": label, "value": row["value"], "color": color})
    return result


def project_ranking(limit: int) -> list[dict[str, Any]]:
    rows = (
        OrderItem.objects.values("project_id", "project__name")
        .annotate(count=Count("id"), quantity=Sum("quantity"))
        .order_by("-count", "-quantity", "project_id")[:limit]
    )
    return [
        {
            "project_id": row["project_id"],
            "name": row["project__name"],
            "count": row["count"],
            "quantity": row["quantity"] or 0,
        }
        for row in rows
    ]


def customer_source_distribution() -> list[dict[str, Any]]:
    rows = Customer.objects.values("source").annotate(value=Count("id")).order_by("-value", "source")
    result = []
    for row in rows:
        label, color = CUSTOMER_SOURCE_DISPLAY.get(row["source"], (row["source"], DEFAULT_COLOR))
        result.append({"source": row["source"], "label": label, "value": row["value"], "color": color})
    return result
