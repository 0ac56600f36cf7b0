"""Bookings: reservation requests collected before staff confirmation."""

from __future__ import annotations

from decimal import Decimal

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """
    A reservation request from the public form or entered by an operator.

    Customer, hotel and package details are copied onto the booking so it
    stays readable even if the referenced rows change later. Conversion turns
    it into an :class:`apps.orders.models.Order`.
    """

    class Status(models.TextChoices):
        PENDING = "pending", _("待确认")
        CONFIRMED = "confirmed", _("已确认")
        CONVERTED = "converted", _("已转订单")
        COMPLETED = "completed", _("已完成")
        CANCELLED = "cancelled", _("已取消")

    class Source(models.TextChoices):
        WECHAT_FORM = "wechat_form", _("WeChat form")
        MANUAL = "manual", _("Entered by staff")

    booking_code = models.CharField(_("Booking code"), max_length=20, unique=True)
    customer_name = models.CharField(_("Customer name"), max_length=100)
    customer_phone = models.CharField(_("Customer phone"), max_length=20, db_index=True)
    customer_wechat = models.CharField(_("Customer WeChat"), max_length=50, blank=True)
    customer = models.ForeignKey(
        "customers.Customer", on_delete=models.SET_NULL, null=True, blank=True, related_name="bookings"
    )
    visit_date = models.DateField(_("Visit date"))
    people_count = models.PositiveIntegerField(_("People"))
    child_count = models.PositiveIntegerField(_("Children"), default=0)
    hotel = models.ForeignKey(
        "accommodations.AccommodationPlace",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )
    hotel_name = models.CharField(_("Hotel name"), max_length=100)
    room_number = models.CharField(_("Room number"), max_length=20, blank=True)
    package = models.ForeignKey(
        "packages.Package", on_delete=models.SET_NULL, null=True, blank=True, related_name="bookings"
    )
    package_name = models.CharField(_("Package name"), max_length=100, blank=True)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    child_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    deposit_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    deposit_collector = models.CharField(_("Deposit collected by"), max_length=50, blank=True)
    deposit_paid_at = models.DateTimeField(null=True, blank=True)
    customer_notes = models.TextField(_("Customer notes"), blank=True)
    operator_notes = models.TextField(_("Operator notes"), blank=True)
    source = models.CharField(max_length=20, choices=Source.choices, default=Source.WECHAT_FORM)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"]),
            models.Index(fields=["visit_date"]),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(people_count__gte=1), name="booking_people_positive"),
            models.CheckConstraint(
                condition=models.Q(child_count__lte=models.F("people_count")),
                name="booking_children_within_people",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.booking_code} {self.customer_name}"

    @property
    def adult_count(self) -> int:
        return self.people_count - self.child_count

    @property
    def balance_due(self) -> Decimal:
        return self.total_amount - self.deposit_amount
