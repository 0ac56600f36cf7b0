"""Customer CRM models."""

from __future__ import annotations

from decimal import Decimal

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.validators import validate_phone, validate_wechat


class Customer(models.Model):
    """Guest of the camp, identified by a unique mobile number."""

    class Source(models.TextChoices):
        XIAOHONGSHU = "xiaohongshu", _("Xiaohongshu")
        WECHAT = "wechat", _("WeChat")
        DOUYIN = "douyin", _("Douyin")
        FRIEND = "friend", _("Friend referral")
        OTHER = "other", _("Other")
        BOOKING_FORM = "booking_form", _("Booking form")

    name = models.CharField(_("Name"), max_length=100)
    phone = models.CharField(_("Phone"), max_length=20, unique=True, validators=[validate_phone])
    wechat = models.CharField(
        _("WeChat"), max_length=50, blank=True, validators=[validate_wechat]
    )
    source = models.CharField(_("Source"), max_length=20, choices=Source.choices)
    tags = models.JSONField(_("Tags"), default=list, blank=True)
    notes = models.TextField(_("Notes"), blank=True)
    first_visit_date = models.DateField(null=True, blank=True)
    last_visit_date = models.DateField(null=True, blank=True)
    total_spent = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    visit_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Customer")
        verbose_name_plural = _("Customers")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["source"]),
            models.Index(fields=["last_visit_date"]),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.phone})"
