"""On-site activities (projects) sold individually or inside packages."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Project(models.Model):
    class Unit(models.TextChoices):
        PER_PERSON = "per_person", _("Per person")
        PER_GROUP = "per_group", _("Per group")

    class Season(models.TextChoices):
        WINTER = "winter", _("Winter")
        SUMMER = "summer", _("Summer")
        ALL = "all", _("All year")

    name = models.CharField(_("Name"), max_length=100)
    description = models.TextField(_("Description"), blank=True)
    price = models.DecimalField(_("Price"), max_digits=10, decimal_places=2)
    unit = models.CharField(max_length=20, choices=Unit.choices, default=Unit.PER_PERSON)
    season = models.CharField(max_length=10, choices=Season.choices, default=Season.ALL)
    duration = models.PositiveIntegerField(_("Duration, minutes"), null=True, blank=True)
    capacity = models.PositiveIntegerField(
        _("Capacity"),
        null=True,
        blank=True,
        help_text=_("Maximum simultaneous participants; empty means unlimited."),
    )
    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Project")
        verbose_name_plural = _("Projects")
        ordering = ["sort_order", "id"]
        constraints = [
            models.CheckConstraint(condition=models.Q(price__gte=0), name="project_price_non_negative"),
        ]

    def __str__(self) -> str:
        return self.name
