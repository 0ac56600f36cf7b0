"""Coaches and the daily activity timeline."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Coach(models.Model):
    class Status(models.TextChoices):
        ON_DUTY = "on_duty", _("On duty")
        OFF_DUTY = "off_duty", _("Off duty")

    name = models.CharField(_("Name"), max_length=50)
    phone = models.CharField(_("Phone"), max_length=20)
    specialties = models.JSONField(_("Specialties"), default=list, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ON_DUTY)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="coach_profile",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Coach")
        verbose_name_plural = _("Coaches")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class DailySchedule(models.Model):
    """One activity slot on the timeline: a project, a time range and a group size."""

    class Status(models.TextChoices):
        SCHEDULED = "scheduled", _("Scheduled")
        IN_PROGRESS = "in_progress", _("In progress")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    date = models.DateField(_("Date"))
    project = models.ForeignKey("projects.Project", on_delete=models.CASCADE, related_name="schedules")
    order_item = models.ForeignKey(
        "orders.OrderItem", on_delete=models.SET_NULL, null=True, blank=True, related_name="schedules"
    )
    coach = models.ForeignKey(Coach, on_delete=models.SET_NULL, null=True, blank=True, related_name="schedules")
    start_time = models.TimeField(_("Start time"))
    end_time = models.TimeField(_("End time"))
    participant_count = models.PositiveIntegerField(_("Participants"), default=1)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.SCHEDULED)
    notes = models.TextField(_("Notes"), blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Schedule")
        verbose_name_plural = _("Schedules")
        ordering = ["date", "start_time", "project_id"]
        indexes = [
            models.Index(fields=["date", "project"]),
            models.Index(fields=["date", "coach"]),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(start_time__lt=models.F("end_time")), name="schedule_time_range"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.date} {self.start_time:%H:%M}-{self.end_time:%H:%M} {self.project_id}"
