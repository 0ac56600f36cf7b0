"""Small helpers shared by reporting and filtering code."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from django.utils.dateparse import parse_date  # type: ignore
from rest_framework import serializers  # type: ignore


def calculate_growth(current: Any, previous: Any) -> float:
    """Period-over-period growth in percent, rounded to one decimal."""
    current = Decimal(str(current or 0))
    previous = Decimal(str(previous or 0))
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return round(float((current - previous) / previous * 100), 1)


def parse_date_param(value: str | None, name: str = "date", *, required: bool = True) -> date | None:
    if not value:
        if required:
            raise serializers.ValidationError({name: "This query parameter is required (YYYY-MM-DD)."})
        return None
    try:
        parsed = parse_date(value)
    except ValueError:
        parsed = None
    if parsed is None:
        raise serializers.ValidationError({name: "Invalid date, expected YYYY-MM-DD."})
    return parsed
