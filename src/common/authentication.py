import typing as t

import structlog
from django.conf import settings
from django.http import HttpRequest
from jwt.exceptions import InvalidTokenError
from ninja.security import HttpBearer
from pydantic import BaseModel, ConfigDict

from .clerk import get_claim, resolve_role, verify_session_token
from .exceptions import UnauthorizedError

logger = structlog.get_logger(__name__)

ROLE_ORGANIZER = "organizer"
ROLE_ADMIN = "admin"


class ClerkUser(BaseModel):
    """The authenticated Clerk user for a request."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str | None = None
    role: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def has_role(self, *roles: str) -> bool:
        return self.role is not None and self.role in roles


class ClerkAuth(HttpBearer):
    """Bearer authentication backed by Clerk session tokens.

    The authenticated ``ClerkUser`` is available as ``request.auth``.

    Usage:
        @route.get("/endpoint", auth=ClerkAuth())
        def my_endpoint(request):
            user = request.auth
    """

    def __call__(self, request: HttpRequest) -> ClerkUser:
        auth_value = request.headers.get(self.header)
        if not auth_value:
            raise UnauthorizedError("Missing authorization header")
        parts = auth_value.split(" ")
        if len(parts) != 2 or parts[0].lower() != self.openapi_scheme or not parts[1]:
            raise UnauthorizedError("Invalid authorization header format")
        return self.authenticate(request, parts[1])

    def authenticate(self, request: HttpRequest, token: str) -> ClerkUser:
        """Verify the token and build the request user.

        Raises:
            UnauthorizedError: If the token cannot be verified.
        """
        try:
            claims = verify_session_token(token)
        except InvalidTokenError as e:
            logger.debug("token_verification_failed", error=str(e))
            raise UnauthorizedError("Token verification failed") from e

        user = ClerkUser(
            id=claims["sub"],
            email=get_claim(claims, settings.CLERK_EMAIL_CLAIM),
            role=resolve_role(claims),
        )
        logger.debug("user_authenticated", user_id=user.id, role=user.role)
        return user


def get_request_user(request: HttpRequest) -> ClerkUser | None:
    """Return the authenticated Clerk user for a request, if any."""
    return t.cast(ClerkUser | None, getattr(request, "auth", None))
