"""Shuttle transport: vehicles, drivers and the daily pickup batches."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Vehicle(models.Model):
    class Status(models.TextChoices):
        AVAILABLE = "available", _("Available")
        IN_USE = "in_use", _("In use")
        MAINTENANCE = "maintenance", _("Maintenance")

    plate_number = models.CharField(_("Plate number"), max_length=20, unique=True)
    vehicle_type = models.CharField(_("Vehicle type"), max_length=20)
    seats = models.PositiveIntegerField(_("Seats"))
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE)
    notes = models.TextField(_("Notes"), blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Vehicle")
        verbose_name_plural = _("Vehicles")
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(condition=models.Q(seats__gte=1), name="vehicle_seats_positive"),
        ]

    def __str__(self) -> str:
        return f"{self.plate_number} ({self.vehicle_type})"


class Driver(models.Model):
    class Status(models.TextChoices):
        ON_DUTY = "on_duty", _("On duty")
        OFF_DUTY = "off_duty", _("Off duty")
        ON_LEAVE = "on_leave", _("On leave")

    name = models.CharField(_("Name"), max_length=50)
    phone = models.CharField(_("Phone"), max_length=20)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ON_DUTY)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="driver_profile",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Driver")
        verbose_name_plural = _("Drivers")
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name


class ShuttleSchedule(models.Model):
    """A pickup batch: one vehicle and driver visiting stops in order."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        IN_PROGRESS = "in_progress", _("In progress")
        COMPLETED = "completed", _("Completed")

    date = models.DateField(_("Date"))
    batch_name = models.CharField(_("Batch name"), max_length=50)
    vehicle = models.ForeignKey(Vehicle, on_delete=models.PROTECT, related_name="schedules")
    driver = models.ForeignKey(Driver, on_delete=models.PROTECT, related_name="schedules")
    departure_time = models.TimeField(_("Departure time"))
    return_time = models.TimeField(_("Return time"), null=True, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    notes = models.TextField(_("Notes"), blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Shuttle schedule")
        verbose_name_plural = _("Shuttle schedules")
        ordering = ["-date", "departure_time"]
        indexes = [
            models.Index(fields=["date", "status"]),
        ]

    def __str__(self) -> str:
        return f"{self.date} {self.batch_name}"

    @property
    def passenger_count(self) -> int:
        return sum(stop.passenger_count for stop in self.stops.all())


class ShuttleStop(models.Model):
    schedule = models.ForeignKey(ShuttleSchedule, on_delete=models.CASCADE, related_name="stops")
    accommodation_place = models.ForeignKey(
        "accommodations.AccommodationPlace", on_delete=models.PROTECT, related_name="shuttle_stops"
    )
    stop_order = models.PositiveIntegerField(_("Stop order"), default=1)
    passenger_count = models.PositiveIntegerField(_("Passengers"), default=0)

    class Meta:
        verbose_name = _("Shuttle stop")
        verbose_name_plural = _("Shuttle stops")
        ordering = ["stop_order", "id"]

    def __str__(self) -> str:
        return f"{self.schedule_id} #{self.stop_order}"
