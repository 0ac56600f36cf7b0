"""Role based permission classes for the staff API."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore

ADMIN = "admin"
OPERATOR = "operator"
DRIVER = "driver"
COACH = "coach"
MARKETER = "marketer"

ALL_ROLES = (ADMIN, OPERATOR, DRIVER, COACH, MARKETER)


class HasRole(permissions.BasePermission):
    """
    Allow authenticated users whose role is one of ``roles``.

    Django superusers pass regardless of their role.
    """

    message = "Your role does not allow this operation."

    def __init__(self, *roles: str) -> None:
        self.roles = set(roles)

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if getattr(user, "is_superuser", False):
            return True
        return getattr(user, "role", None) in self.roles


class RoleRequiredMixin:
    """
    Resolve permissions from an ``action_roles`` mapping on the viewset.

    Keys are action names (``list``, ``create``, custom ``@action`` names)
    or, on plain ``APIView`` classes, lower-case HTTP methods;
    ``"default"`` covers everything not listed. Unauthenticated requests are
    rejected with 401 before the role check runs.
    """

    action_roles: dict[str, tuple[str, ...]] = {}

    def get_permissions(self):  # type: ignore
        key = getattr(self, "action", None) or self.request.method.lower()
        roles = self.action_roles.get(key)
        if roles is None:
            roles = self.action_roles.get("default", (ADMIN,))
        return [permissions.IsAuthenticated(), HasRole(*roles)]
