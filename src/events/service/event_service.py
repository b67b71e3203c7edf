"""Event lifecycle: creation, updates, deletion and public listings."""

import typing as t

import structlog
from django.conf import settings
from django.db import transaction

from common.authentication import ClerkUser
from common.exceptions import BadRequestError, ConflictError, NotFoundError
from common.pagination import Page, clamp_limit, paginate_queryset
from events import schema
from events.models import Event, Organizer

from . import organizer_service, update_db_instance
from .slug import generate_unique_slug
from .validation import (
    strip_admin_only_fields,
    validate_event_ownership,
    validate_max_participants_reduction,
    validate_team_event_capacity,
)

logger = structlog.get_logger(__name__)

READ_ONLY_EVENT_FIELDS = ("id", "creator_id", "slug", "created_at", "current_participants", "is_team_event")

REQUIRED_EVENT_FIELDS: tuple[tuple[str, str], ...] = (
    ("title", "Event title is required"),
    ("type", "Event type is required"),
    ("date", "Event date is required"),
)


def validate_create_payload(payload: schema.EventCreateSchema) -> None:
    """Check required fields and numeric bounds of a new event, in a stable order.

    Raises:
        BadRequestError: For the first rule that fails.
    """
    for field, message in REQUIRED_EVENT_FIELDS:
        if not getattr(payload, field):
            raise BadRequestError(message)
    if payload.is_team_event is None:
        raise BadRequestError("isTeamEvent must be a boolean")
    if payload.required_participants is None or payload.required_participants <= 0:
        raise BadRequestError("requiredParticipants must be a positive number")
    if payload.max_participants is None or payload.max_participants <= 0:
        raise BadRequestError("maxParticipants must be a positive number")
    if not payload.location:
        raise BadRequestError("Event location is required")
    if not payload.description:
        raise BadRequestError("Event description is required")
    if not payload.distance:
        raise BadRequestError("Event distance is required")
    if payload.registration_fee is None or payload.registration_fee < 0:
        raise BadRequestError("registrationFee must be a non-negative number")
    if not payload.registration_deadline:
        raise BadRequestError("registrationDeadline is required")
    if not payload.image:
        raise BadRequestError("Event image is required")
    if not payload.difficulty:
        raise BadRequestError("Event difficulty is required")


def resolve_organizer(organizer_id: str | None, user: ClerkUser) -> Organizer:
    """Pick the organizer for a new event.

    An explicit organizer must exist and, for non-admins, belong to the user. Otherwise the
    user's own organizer profile is used.
    """
    if organizer_id:
        if user.is_admin:
            return organizer_service.get_organizer(organizer_id)
        return organizer_service.validate_organizer_exists(organizer_id, user)

    organizer = organizer_service.find_organizer_for_user(user)
    if organizer is None:
        raise BadRequestError(
            "No organizer profile found for user. Please create an organizer profile first "
            "or provide a valid organizerId.",
            details={"creator_id": user.id},
        )
    return organizer


@transaction.atomic
def create_event(payload: schema.EventCreateSchema, user: ClerkUser) -> Event:
    validate_create_payload(payload)
    is_team_event = t.cast(bool, payload.is_team_event)
    max_participants = t.cast(int, payload.max_participants)
    required_participants = t.cast(int, payload.required_participants)
    validate_team_event_capacity(is_team_event, max_participants, required_participants)

    organizer = resolve_organizer(payload.organizer_id, user)
    slug = generate_unique_slug(payload.title)

    event = Event.objects.create(
        creator_id=user.id,
        organizer=organizer,
        title=payload.title,
        type=payload.type,
        date=payload.date,
        is_featured=False,
        is_team_event=is_team_event,
        is_relay=payload.is_relay,
        required_participants=required_participants,
        max_participants=max_participants,
        current_participants=0,
        location=payload.location,
        description=payload.description,
        distance=payload.distance,
        registration_fee=payload.registration_fee,
        registration_deadline=payload.registration_deadline,
        image=payload.image,
        difficulty=payload.difficulty,
        tags=payload.tags,
        slug=slug,
        is_enabled=True,
    )
    logger.info("event_created", event_id=event.id, slug=event.slug, creator_id=user.id)
    return event


def get_event(event_id: str) -> Event:
    try:
        return Event.objects.get(pk=event_id)
    except Event.DoesNotExist as e:
        raise NotFoundError("Event not found") from e


def get_event_by_slug(slug: str) -> Event:
    """Get a public (enabled) event by its slug."""
    event = Event.objects.enabled().filter(slug=slug).first()
    if event is None:
        raise NotFoundError("Event not found")
    return event


@transaction.atomic
def update_event(event_id: str, payload: schema.EventUpdateSchema, user: ClerkUser) -> Event:
    """Partially update an event.

    Read-only fields are ignored and admin-only fields are dropped for everyone else.
    The slug cannot change.
    """
    data = payload.model_dump(exclude_unset=True)
    if "slug" in data:
        raise BadRequestError("Event slug cannot be modified after creation")

    event = get_event(event_id)

    max_participants = data.get("max_participants") or event.max_participants
    required_participants = data.get("required_participants") or event.required_participants
    if "max_participants" in data:
        validate_max_participants_reduction(max_participants, event.current_participants)
    validate_team_event_capacity(event.is_team_event, max_participants, required_participants)

    validate_event_ownership(event, user)

    for field in READ_ONLY_EVENT_FIELDS:
        data.pop(field, None)
    data = strip_admin_only_fields(data, user)
    data = {k: v for k, v in data.items() if v is not None or k == "is_relay"}

    if organizer_id := data.pop("organizer_id", None):
        data["organizer"] = resolve_organizer(organizer_id, user)

    if not data:
        return event

    event = update_db_instance(event, data)
    logger.info("event_updated", event_id=event.id, fields=sorted(data))
    return event


@transaction.atomic
def delete_event(event_id: str, user: ClerkUser) -> None:
    """Delete an event that has no registrations."""
    event = get_event(event_id)
    validate_event_ownership(event, user)
    if event.reservations.exists():
        raise ConflictError(
            "Cannot delete event with existing registrations. "
            "Please contact participants to cancel their registrations first.",
            details={"event_id": event.id, "current_participants": event.current_participants},
        )
    event.delete()
    logger.info("event_deleted", event_id=event_id, deleted_by=user.id)


def list_events(
    filters: schema.EventFilterSchema, limit: int | None = None, next_token: str | None = None
) -> Page[Event]:
    qs = filters.filter(Event.objects.enabled())
    return paginate_queryset(qs, clamp_limit(limit, settings.PAGINATION_DEFAULT_LIMIT), next_token)


def list_featured_events(limit: int | None = None, next_token: str | None = None) -> Page[Event]:
    qs = Event.objects.featured()
    return paginate_queryset(qs, clamp_limit(limit, settings.PAGINATION_FEATURED_LIMIT), next_token)


def list_events_by_creator(user: ClerkUser, limit: int | None = None, next_token: str | None = None) -> Page[Event]:
    """All events created by the user, including disabled ones."""
    qs = Event.objects.created_by(user.id)
    return paginate_queryset(qs, clamp_limit(limit, settings.PAGINATION_DEFAULT_LIMIT), next_token)
