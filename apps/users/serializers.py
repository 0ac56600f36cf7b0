"""Serializers for user-related API endpoints."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.contrib.auth.validators import UnicodeUsernameValidator  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public representation of a staff account."""

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "name",
            "phone",
            "role",
            "is_active",
            "last_login",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "username", "last_login", "created_at", "updated_at"]


class UserCreateSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=6)

    class Meta:
        model = User
        fields = ["username", "password", "name", "phone", "role", "is_active"]
        extra_kwargs = {
            "username": {"validators": [UnicodeUsernameValidator()]},
            "name": {"required": False, "allow_blank": True},
            "phone": {"required": False, "allow_blank": True},
            "role": {"required": True},
        }

    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)


class UserUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["name", "phone", "role", "is_active"]


class PasswordResetSerializer(serializers.Serializer):
    new_password = serializers.CharField(min_length=6, write_only=True)
