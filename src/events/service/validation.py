"""Validation rules shared by the organizer and event services."""

import typing as t

import structlog

from common.authentication import ClerkUser
from common.exceptions import BadRequestError, ForbiddenError
from events.models import Event

logger = structlog.get_logger(__name__)

ADMIN_ONLY_EVENT_FIELDS = frozenset({"is_featured"})


def validate_event_ownership(event: Event, user: ClerkUser) -> None:
    """Only the event's creator or an admin may modify it."""
    if user.is_admin:
        return
    if event.creator_id != user.id:
        raise ForbiddenError("You can only update events you created")


def validate_team_event_capacity(is_team_event: bool, max_participants: int, required_participants: int) -> None:
    """A team event must offer a whole number of team slots.

    Raises:
        BadRequestError: With the two nearest valid capacities as suggestions.
    """
    if not is_team_event or max_participants % required_participants == 0:
        return

    available_team_slots = max_participants // required_participants
    lower = available_team_slots * required_participants
    upper = lower + required_participants
    raise BadRequestError(
        f"For team events, maxParticipants ({max_participants}) must be a multiple of "
        f"requiredParticipants ({required_participants}). Suggested values: {lower} or {upper}",
        details={
            "max_participants": max_participants,
            "required_participants": required_participants,
            "suggested_values": [lower, upper],
            "available_team_slots": available_team_slots,
        },
    )


def validate_max_participants_reduction(new_max_participants: int, current_participants: int) -> None:
    if new_max_participants >= current_participants:
        return
    raise BadRequestError(
        f"Cannot reduce maxParticipants ({new_max_participants}) below current registrations "
        f"({current_participants}). Minimum allowed value: {current_participants}",
        details={
            "requested_max_participants": new_max_participants,
            "current_participants": current_participants,
            "minimum_allowed": current_participants,
        },
    )


def validate_immutable_fields(data: t.Mapping[str, t.Any], immutable_fields: t.Iterable[str]) -> None:
    attempted = [field for field in immutable_fields if field in data]
    if attempted:
        raise BadRequestError(
            f"The following fields cannot be modified after creation: {', '.join(attempted)}",
            details={"attempted_fields": attempted},
        )


def strip_admin_only_fields(data: dict[str, t.Any], user: ClerkUser) -> dict[str, t.Any]:
    """Drop fields only admins may set. Non-admin attempts are ignored, not rejected."""
    if user.is_admin:
        return data
    stripped = {k: v for k, v in data.items() if k not in ADMIN_ONLY_EVENT_FIELDS}
    if removed := sorted(set(data) - set(stripped)):
        logger.debug("admin_only_fields_removed", user_id=user.id, fields=removed)
    return stripped
