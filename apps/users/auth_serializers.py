"""Serializers for authentication flows (login, password change)."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers, status  # type: ignore

from shared.exceptions import ForbiddenError, ServiceError

User = get_user_model()


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        username = attrs.get("username", "")
        password = attrs.get("password", "")

        invalid = ServiceError(
            "Invalid username or password.",
            code="INVALID_CREDENTIALS",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
        try:
            user = User.objects.get(username=username)
        except User.DoesNotExist:
            raise invalid

        if user.is_locked:
            raise ForbiddenError(
                "Account is temporarily locked. Try again later.", code="ACCOUNT_LOCKED"
            )

        if not user.check_password(password):
            user.register_failed_attempt()
            raise invalid

        if not user.is_active:
            raise ForbiddenError("Account is disabled.", code="ACCOUNT_DISABLED")

        user.record_login()
        attrs["user"] = user
        return attrs


class ChangePasswordSerializer(serializers.Serializer):
    old_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(min_length=6, write_only=True)

    def validate_old_password(self, value: str) -> str:
        user = self.context["request"].user
        if not user.check_password(value):
            raise ServiceError("Current password is incorrect.", code="INVALID_PASSWORD")
        return value

    def save(self, **kwargs: Any):  # type: ignore
        user = self.context["request"].user
        user.set_password(self.validated_data["new_password"])
        user.save(update_fields=["password"])
        return user
