"""Organizer profiles: one per Clerk user, owning that user's events."""

import re
import typing as t

import structlog
from django.db import transaction

from common.authentication import ClerkUser
from common.exceptions import ConflictError, ForbiddenError, NotFoundError, UnprocessableError
from events import schema
from events.models import Organizer
from events.models.organizer import WEBSITE_PATTERN

from . import update_db_instance

logger = structlog.get_logger(__name__)

NAME_MAX_LENGTH = 255
CONTACT_MAX_LENGTH = 255
WEBSITE_MAX_LENGTH = 500
DESCRIPTION_MAX_LENGTH = 1000
LISTED_EVENT_TITLES = 3

_website_re = re.compile(WEBSITE_PATTERN)


# Sanitisation


def sanitize_name(name: str) -> str:
    return re.sub(r"\s+", " ", name.strip())


def sanitize_website(website: str | None) -> str | None:
    """Normalise a website. ``None`` means "not provided", ``""`` means "clear it"."""
    if website is None:
        return None
    website = website.strip()
    if not website:
        return ""
    if not re.match(r"^[a-z][a-z0-9+.-]*://", website, flags=re.IGNORECASE):
        website = f"https://{website}"
    return website


def sanitize_description(description: str | None) -> str | None:
    if description is None:
        return None
    return description.strip()


def sanitize_organizer_data(data: dict[str, t.Any]) -> dict[str, t.Any]:
    sanitized = dict(data)
    if isinstance(sanitized.get("name"), str):
        sanitized["name"] = sanitize_name(sanitized["name"])
    if isinstance(sanitized.get("contact"), str):
        sanitized["contact"] = sanitized["contact"].strip()
    if "website" in sanitized:
        sanitized["website"] = sanitize_website(sanitized["website"])
    if "description" in sanitized:
        sanitized["description"] = sanitize_description(sanitized["description"])
    return sanitized


# Validation


def _validate_optional_fields(data: dict[str, t.Any]) -> None:
    website = data.get("website")
    if website:
        if len(website) > WEBSITE_MAX_LENGTH:
            raise UnprocessableError("Website must be 500 characters or less")
        if not _website_re.match(website):
            raise UnprocessableError("Website must be a valid URL starting with http:// or https://")
    description = data.get("description")
    if description and len(description) > DESCRIPTION_MAX_LENGTH:
        raise UnprocessableError("Description must be 1000 characters or less")


def validate_create_data(data: dict[str, t.Any]) -> None:
    """Validate sanitised organizer data for creation.

    Raises:
        UnprocessableError: On the first rule that fails.
    """
    name = data.get("name")
    if not name:
        raise UnprocessableError("Name is required and must be a non-empty string")
    if len(name) > NAME_MAX_LENGTH:
        raise UnprocessableError("Name must be 255 characters or less")
    contact = data.get("contact")
    if not contact:
        raise UnprocessableError("Contact is required and must be a non-empty string")
    if len(contact) > CONTACT_MAX_LENGTH:
        raise UnprocessableError("Contact must be 255 characters or less")
    _validate_optional_fields(data)


def validate_update_data(data: dict[str, t.Any]) -> None:
    """Validate sanitised organizer data for a partial update."""
    if not data:
        raise UnprocessableError("At least one field must be provided for update")
    if "name" in data:
        if not data["name"]:
            raise UnprocessableError("Name must be a non-empty string")
        if len(data["name"]) > NAME_MAX_LENGTH:
            raise UnprocessableError("Name must be 255 characters or less")
    if "contact" in data:
        if not data["contact"]:
            raise UnprocessableError("Contact must be a non-empty string")
        if len(data["contact"]) > CONTACT_MAX_LENGTH:
            raise UnprocessableError("Contact must be 255 characters or less")
    _validate_optional_fields(data)


def validate_organizer_ownership(organizer: Organizer, user: ClerkUser) -> None:
    if user.is_admin:
        return
    if organizer.clerk_id != user.id:
        raise ForbiddenError("You can only modify organizers you created")


# Queries


def get_organizer(organizer_id: str) -> Organizer:
    try:
        return Organizer.objects.get(pk=organizer_id)
    except Organizer.DoesNotExist as e:
        raise NotFoundError(f"Organizer with ID {organizer_id} not found") from e


def get_organizer_by_clerk_id(clerk_id: str) -> Organizer:
    organizer = Organizer.objects.owned_by(clerk_id).first()
    if organizer is None:
        raise NotFoundError(f"Organizer with Clerk ID {clerk_id} not found")
    return organizer


def find_organizer_for_user(user: ClerkUser) -> Organizer | None:
    return Organizer.objects.owned_by(user.id).first()


def validate_organizer_exists(organizer_id: str, user: ClerkUser | None = None) -> Organizer:
    """Return the organizer if it exists and, for non-admin users, belongs to them.

    Organizers owned by someone else are reported as missing, not forbidden.
    """
    organizer = get_organizer(organizer_id)
    if user is not None and not user.is_admin and organizer.clerk_id != user.id:
        logger.info("organizer_access_hidden", organizer_id=organizer_id, user_id=user.id)
        raise NotFoundError(f"Organizer with ID {organizer_id} not found")
    return organizer


# Mutations


@transaction.atomic
def create_organizer(payload: schema.OrganizerCreateSchema, user: ClerkUser) -> tuple[Organizer, bool]:
    """Create the user's organizer profile.

    Creation is idempotent: if the user already has an organizer it is returned unchanged.

    Returns:
        The organizer, and whether it was created by this call.
    """
    if existing := find_organizer_for_user(user):
        logger.info("organizer_already_exists", organizer_id=existing.id, clerk_id=user.id)
        return existing, False

    data = sanitize_organizer_data(payload.model_dump())
    validate_create_data(data)
    organizer = Organizer.objects.create(
        clerk_id=user.id,
        name=data["name"],
        contact=data["contact"],
        website=data.get("website") or "",
        description=data.get("description") or "",
    )
    logger.info("organizer_created", organizer_id=organizer.id, clerk_id=user.id)
    return organizer, True


def update_organizer(organizer_id: str, payload: schema.OrganizerUpdateSchema, user: ClerkUser) -> Organizer:
    """Partially update an organizer. Empty website or description clears the field."""
    data = sanitize_organizer_data(payload.model_dump(exclude_unset=True))
    data = {k: v for k, v in data.items() if v is not None or k in ("website", "description")}
    data = {k: ("" if v is None else v) for k, v in data.items()}
    validate_update_data(data)

    organizer = get_organizer(organizer_id)
    validate_organizer_ownership(organizer, user)

    organizer = update_db_instance(organizer, data)
    logger.info("organizer_updated", organizer_id=organizer.id, fields=sorted(data))
    return organizer


def validate_no_event_dependencies(organizer: Organizer) -> None:
    """An organizer that still has events cannot be deleted.

    Raises:
        ConflictError: Listing up to three of the dependent event titles.
    """
    events = list(organizer.events.order_by("created_at").values("id", "title"))
    if not events:
        return

    titles = ", ".join(event["title"] for event in events[:LISTED_EVENT_TITLES])
    remaining = len(events) - LISTED_EVENT_TITLES
    more = f" and {remaining} more" if remaining > 0 else ""
    raise ConflictError(
        f"Cannot delete organizer. {len(events)} event(s) are associated with this organizer: {titles}{more}.",
        details={
            "organizer_id": organizer.id,
            "event_count": len(events),
            "events": [{"event_id": event["id"], "title": event["title"]} for event in events],
        },
    )


@transaction.atomic
def delete_organizer(organizer_id: str, user: ClerkUser) -> None:
    organizer = get_organizer(organizer_id)
    validate_organizer_ownership(organizer, user)
    validate_no_event_dependencies(organizer)
    organizer.delete()
    logger.info("organizer_deleted", organizer_id=organizer_id, deleted_by=user.id)
