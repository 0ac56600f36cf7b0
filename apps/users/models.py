"""User model for camp staff.

Staff log in with a username. Every account carries one role (admin,
operator, driver, coach, marketer) that gates the API, and the usual
lockout counters used by the login endpoint.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from django.conf import settings  # type: ignore
from django.contrib.auth.models import AbstractUser, UserManager  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class StaffUserManager(UserManager):
    """Default manager; superusers are created with the admin role."""

    use_in_migrations = True

    def create_user(self, username: str, email: str | None = None, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("role", User.RoleChoices.OPERATOR)
        return super().create_user(username, email, password, **extra_fields)

    def create_superuser(self, username: str, email: str | None = None, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("role", User.RoleChoices.ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)

    def active_admins(self):
        return self.filter(role=User.RoleChoices.ADMIN, is_active=True)


class User(AbstractUser):
    """Camp staff account with a role and login lockout counters."""

    class RoleChoices(models.TextChoices):
        ADMIN = "admin", _("Administrator")
        OPERATOR = "operator", _("Operator")
        DRIVER = "driver", _("Driver")
        COACH = "coach", _("Coach")
        MARKETER = "marketer", _("Marketer")

    name = models.CharField(_("Display name"), max_length=100, blank=True)
    phone = models.CharField(_("Phone"), max_length=20, blank=True)
    role = models.CharField(
        _("Role"),
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.OPERATOR,
    )
    failed_login_attempts = models.PositiveIntegerField(default=0)
    locked_until = models.DateTimeField(_("Locked until"), null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StaffUserManager()

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.username} ({self.get_role_display()})"

    @property
    def is_admin(self) -> bool:
        return self.role == self.RoleChoices.ADMIN

    @property
    def is_locked(self) -> bool:
        return bool(self.locked_until and self.locked_until > timezone.now())

    def lock(self, minutes: int | None = None) -> None:
        minutes = minutes or settings.LOGIN_LOCKOUT_MINUTES
        self.locked_until = timezone.now() + timedelta(minutes=minutes)
        self.failed_login_attempts = 0
        self.save(update_fields=["locked_until", "failed_login_attempts"])

    def unlock(self) -> None:
        self.locked_until = None
        self.failed_login_attempts = 0
        self.save(update_fields=["locked_until", "failed_login_attempts"])

    def register_failed_attempt(self, threshold: int | None = None) -> None:
        threshold = threshold or settings.LOGIN_LOCKOUT_THRESHOLD
        self.failed_login_attempts += 1
        if self.failed_login_attempts >= threshold:
            self.lock()
            return
        self.save(update_fields=["failed_login_attempts"])

    def record_login(self) -> None:
        self.last_login = timezone.now()
        self.locked_until = None
        self.failed_login_attempts = 0
        self.save(update_fields=["last_login", "locked_until", "failed_login_attempts"])
