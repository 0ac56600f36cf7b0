"""Hotels and lodges where guests stay, used as shuttle pick-up points."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class AccommodationPlace(models.Model):
    class PlaceType(models.TextChoices):
        SELF = "self", _("Own lodge")
        EXTERNAL = "external", _("External hotel")

    name = models.CharField(_("Name"), max_length=100)
    type = models.CharField(_("Type"), max_length=10, choices=PlaceType.choices, default=PlaceType.EXTERNAL)
    address = models.CharField(_("Address"), max_length=255, blank=True)
    distance = models.DecimalField(
        _("Distance, km"), max_digits=6, decimal_places=2, null=True, blank=True
    )
    duration = models.PositiveIntegerField(_("Drive time, minutes"), null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Accommodation place")
        verbose_name_plural = _("Accommodation places")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
