import typing as t

from ninja_extra import ControllerBase

from common.authentication import ClerkUser


class UserAwareController(ControllerBase):
    def maybe_user(self) -> ClerkUser | None:
        """Get the Clerk user for this request, if authenticated."""
        return t.cast(ClerkUser | None, getattr(self.context.request, "auth", None))  # type: ignore[union-attr]

    def user(self) -> ClerkUser:
        """Get the Clerk user for this request."""
        return t.cast(ClerkUser, self.context.request.auth)  # type: ignore[union-attr]
