"""User management API (admin only)."""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.exceptions import ConflictError, ServiceError

from .api.permissions import ADMIN, RoleRequiredMixin
from .filters import UserFilterSet
from .serializers import (
    PasswordResetSerializer,
    UserCreateSerializer,
    UserSerializer,
    UserUpdateSerializer,
)

User = get_user_model()
logger = logging.getLogger(__name__)


class UserViewSet(RoleRequiredMixin, viewsets.ModelViewSet):
    """Staff account management.

    - every action is restricted to administrators
    - the caller cannot delete themselves, and the last active admin stays
    """

    queryset = User.objects.all()
    filterset_class = UserFilterSet
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    ordering_fields = ["created_at", "username", "role"]
    action_roles = {"default": (ADMIN,)}

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return UserCreateSerializer
        if self.action in {"update", "partial_update"}:
            return UserUpdateSerializer
        return UserSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        if User.objects.filter(username=serializer.validated_data["username"]).exists():
            raise ConflictError("Username already exists.", code="USERNAME_EXISTS")
        user = serializer.save()
        logger.info("User %s created with role %s", user.username, user.role)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    @transaction.atomic
    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        user = self.get_object()
        serializer = self.get_serializer(user, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        loses_admin = user.is_admin and user.is_active and (
            data.get("role", user.role) != User.RoleChoices.ADMIN or data.get("is_active", True) is False
        )
        if loses_admin:
            self._ensure_not_last_admin(user)
        user = serializer.save()
        return Response(UserSerializer(user).data)

    @transaction.atomic
    def destroy(self, request, *args, **kwargs):  # type: ignore
        user = self.get_object()
        if user.pk == request.user.pk:
            raise ServiceError("You cannot delete your own account.", code="CANNOT_DELETE_SELF")
        if user.is_admin and user.is_active:
            self._ensure_not_last_admin(user)
        logger.info("User %s deleted by %s", user.username, request.user.username)
        user.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["put"], url_path="reset-password")
    def reset_password(self, request, pk=None):
        user = self.get_object()
        serializer = PasswordResetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user.set_password(serializer.validated_data["new_password"])
        user.save(update_fields=["password"])
        if user.is_locked:
            user.unlock()
        return Response({"detail": "Password reset."})

    @staticmethod
    def _ensure_not_last_admin(user) -> None:
        if not User.objects.active_admins().exclude(pk=user.pk).exists():
            raise ServiceError("At least one active administrator must remain.", code="LAST_ADMIN")
