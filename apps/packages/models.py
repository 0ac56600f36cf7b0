"""Bundled activity packages and their date-dependent pricing."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.projects.models import Project


class Package(models.Model):
    name = models.CharField(_("Name"), max_length=100)
    description = models.TextField(_("Description"), blank=True)
    price = models.DecimalField(_("Price per adult"), max_digits=10, decimal_places=2)
    child_price = models.DecimalField(
        _("Price per child"), max_digits=10, decimal_places=2, null=True, blank=True
    )
    special_pricing = models.JSONField(
        _("Special pricing"),
        default=dict,
        blank=True,
        help_text=_('Date ranges like {"2025-01-25~2025-02-05": {"price": 399, "child_price": 299}}.'),
    )
    min_people = models.PositiveIntegerField(_("Minimum people"), default=1)
    is_active = models.BooleanField(default=True)
    show_in_booking_form = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)
    projects = models.ManyToManyField(Project, through="PackageItem", related_name="packages")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Package")
        verbose_name_plural = _("Packages")
        ordering = ["sort_order", "id"]

    def __str__(self) -> str:
        return self.name


class PackageItem(models.Model):
    package = models.ForeignKey(Package, on_delete=models.CASCADE, related_name="items")
    project = models.ForeignKey(Project, on_delete=models.PROTECT, related_name="package_items")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Package item")
        verbose_name_plural = _("Package items")
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["package", "project"], name="unique_package_project"),
        ]

    def __str__(self) -> str:
        return f"{self.package_id}:{self.project_id}"
