from django.http import HttpRequest
from ninja_extra import ControllerBase
from ninja_extra.permissions import BasePermission

from .authentication import ROLE_ADMIN, ROLE_ORGANIZER, get_request_user


class HasRole(BasePermission):
    """Allow the request only if the authenticated user holds one of the given roles."""

    def __init__(self, *roles: str) -> None:
        """Store the accepted roles and the denial message."""
        self.roles = roles
        self.message = f"Access denied. Required roles: {', '.join(roles)}"

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Check the role of the authenticated user."""
        user = get_request_user(request)
        return user is not None and user.has_role(*self.roles)


def organizer_or_admin() -> HasRole:
    return HasRole(ROLE_ORGANIZER, ROLE_ADMIN)
