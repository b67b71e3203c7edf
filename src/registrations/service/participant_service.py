"""Organizer-facing queries over registrations and their participants."""

import typing as t

import structlog
from django.db import transaction
from django.db.models import Case, Count, F, Q, When

from common.authentication import ClerkUser
from common.exceptions import BadRequestError, ForbiddenError, NotFoundError
from common.utils import is_valid_ulid
from events.models import Event
from registrations.models import Participant, RegistrationType, Reservation

from .validation import validate_event_id_format

logger = structlog.get_logger(__name__)


def validate_reservation_id_format(reservation_id: str) -> None:
    if not is_valid_ulid(reservation_id):
        raise BadRequestError(
            "Invalid reservationId format. Must be a valid ULID.", details={"reservation_id": reservation_id}
        )


def validate_event_access(event: Event, user: ClerkUser) -> None:
    if user.is_admin or event.creator_id == user.id:
        return
    logger.info("event_participants_access_denied", event_id=event.id, user_id=user.id)
    raise ForbiddenError(
        "Access denied. You can only view participants for events you created.",
        details={"event_id": event.id},
    )


def registration_summary(event: Event) -> dict[str, int]:
    counts = Reservation.objects.for_event(event.id).aggregate(
        total_registrations=Count("id"),
        paid_registrations=Count("id", filter=Q(payment_status=True)),
        individual_registrations=Count("id", filter=Q(registration_type=RegistrationType.INDIVIDUAL)),
        team_registrations=Count("id", filter=Q(registration_type=RegistrationType.TEAM)),
    )
    counts["unpaid_registrations"] = counts["total_registrations"] - counts["paid_registrations"]
    return counts


def get_participants_by_event(event_id: str, user: ClerkUser) -> dict[str, t.Any]:
    """List the participants of an event together with their registration data.

    Only the event's creator and admins have access.
    """
    validate_event_id_format(event_id)
    event = Event.objects.filter(pk=event_id).first()
    if event is None:
        raise NotFoundError(f"Event with ID {event_id} not found")
    validate_event_access(event, user)

    participants = list(
        Participant.objects.filter(event=event).select_related("reservation").order_by("reservation_id", "created_at")
    )
    return {
        "event_id": event.id,
        "participants": participants,
        "total_count": len(participants),
        "registration_summary": registration_summary(event),
    }


def get_reservation_for_user(
    reservation_id: str, user: ClerkUser, *, lock: bool = False, check_access: bool = True
) -> Reservation:
    validate_reservation_id_format(reservation_id)
    qs = Reservation.objects.select_related("event")
    if lock:
        qs = qs.select_for_update()
    reservation = qs.filter(pk=reservation_id).first()
    if reservation is None:
        raise NotFoundError("Registration not found", details={"reservation_id": reservation_id})
    if check_access:
        validate_event_access(reservation.event, user)
    return reservation


def get_registration(reservation_id: str, user: ClerkUser) -> dict[str, t.Any]:
    """Get a registration with its participants and a summary of its event."""
    reservation = get_reservation_for_user(reservation_id, user)
    event = reservation.event
    return {
        "registration": reservation,
        "participants": list(reservation.participants.order_by("created_at")),
        "event": {"event_id": event.id, "title": event.title, "creator_id": event.creator_id},
    }


@transaction.atomic
def delete_registration(reservation_id: str, user: ClerkUser) -> dict[str, t.Any]:
    """Delete a registration and its participants, and free their spots on the event."""
    reservation = get_reservation_for_user(reservation_id, user, lock=True)
    event_id = reservation.event_id
    deleted_count = reservation.participants.count()

    Event.objects.filter(pk=event_id).update(
        current_participants=Case(
            When(current_participants__gte=deleted_count, then=F("current_participants") - deleted_count),
            default=0,
        )
    )
    reservation.participants.all().delete()
    reservation.delete()

    logger.info(
        "registration_deleted",
        reservation_id=reservation_id,
        event_id=event_id,
        deleted_participant_count=deleted_count,
        deleted_by=user.id,
    )
    return {
        "reservation_id": reservation_id,
        "event_id": event_id,
        "deleted_participant_count": deleted_count,
    }
