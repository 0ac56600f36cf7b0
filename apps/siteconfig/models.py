"""Key/value settings editable from the admin console."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class SiteConfig(models.Model):
    key = models.CharField(_("Key"), max_length=100, unique=True)
    value = models.JSONField(_("Value"), null=True, blank=True)
    label = models.CharField(_("Label"), max_length=100, blank=True)
    group = models.CharField(_("Group"), max_length=50, default="general")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Site setting")
        verbose_name_plural = _("Site settings")
        ordering = ["group", "key"]

    def __str__(self) -> str:
        return self.key
