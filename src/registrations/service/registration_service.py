"""Creation of individual and team registrations.

Both flows lock the event row, so capacity checks and the participant counter
update happen atomically with respect to concurrent registrations.
"""

import typing as t
from dataclasses import dataclass

import structlog
from django.db import transaction
from django.db.models import F

from events.models import Event
from notifications import tasks as notification_tasks
from registrations import schema
from registrations.models import Participant, RegistrationType, Reservation

from .validation import (
    normalize_email,
    validate_emails_not_registered,
    validate_event_availability,
    validate_event_id_format,
    validate_individual_capacity,
    validate_individual_participant,
    validate_team_capacity,
    validate_team_participants,
)

logger = structlog.get_logger(__name__)

TEAM_INHERITED_FLAGS = ("waiver", "newsletter")
FIRST_MEMBER_INHERITED_FIELDS = (
    "address",
    "city",
    "state",
    "zip_code",
    "country",
    "medical_conditions",
    "medications",
    "allergies",
)
PARTICIPANT_FIELDS = tuple(schema.ParticipantInputSchema.model_fields)


@dataclass
class RegistrationResult:
    reservation: Reservation
    participants: list[Participant]


def _participant_kwargs(data: dict[str, t.Any]) -> dict[str, t.Any]:
    kwargs = {field: data[field] for field in PARTICIPANT_FIELDS if data.get(field) is not None}
    kwargs["email"] = normalize_email(kwargs["email"])
    for field in ("first_name", "last_name"):
        kwargs[field] = kwargs[field].strip()
    return kwargs


def _increment_participants(event: Event, count: int) -> None:
    Event.objects.filter(pk=event.pk).update(current_participants=F("current_participants") + count)


def _queue_confirmation(reservation: Reservation) -> None:
    transaction.on_commit(lambda: notification_tasks.send_registration_confirmation.delay(reservation.id))


def build_team_members(payload: schema.RegistrationCreateSchema) -> list[dict[str, t.Any]]:
    """Expand team-level defaults onto the members.

    Members inherit ``waiver`` and ``newsletter`` when they omit them; the first member also
    receives the team-level address and medical fields it leaves blank.
    """
    team = payload.model_dump()
    members = [member.model_dump() for member in payload.participants or []]
    for member in members:
        for flag in TEAM_INHERITED_FLAGS:
            if member.get(flag) is None:
                member[flag] = team.get(flag)
    if members:
        first = members[0]
        for field in FIRST_MEMBER_INHERITED_FIELDS:
            if not first.get(field) and team.get(field):
                first[field] = team[field]
    return members


@transaction.atomic
def create_individual_registration(event_id: str, payload: schema.RegistrationCreateSchema) -> RegistrationResult:
    validate_event_id_format(event_id)
    data = payload.model_dump(exclude={"participants"})
    validate_individual_participant(data)

    event = validate_event_availability(event_id, RegistrationType.INDIVIDUAL, lock=True)
    email = normalize_email(data["email"])
    validate_emails_not_registered(event, [email])
    validate_individual_capacity(event)

    reservation = Reservation.objects.create(
        event=event,
        registration_type=RegistrationType.INDIVIDUAL,
        payment_status=False,
        total_participants=1,
        registration_fee=event.registration_fee,
    )
    participant = Participant.objects.create(reservation=reservation, event=event, **_participant_kwargs(data))
    _increment_participants(event, 1)
    _queue_confirmation(reservation)

    logger.info("individual_registration_created", reservation_id=reservation.id, event_id=event.id)
    return RegistrationResult(reservation=reservation, participants=[participant])


@transaction.atomic
def create_team_registration(event_id: str, payload: schema.RegistrationCreateSchema) -> RegistrationResult:
    validate_event_id_format(event_id)
    members = build_team_members(payload)
    validate_team_participants(members)

    event = validate_event_availability(event_id, RegistrationType.TEAM, lock=True)
    emails = [normalize_email(member["email"]) for member in members]
    validate_emails_not_registered(event, emails, team=True)
    validate_team_capacity(event, len(members))

    reservation = Reservation.objects.create(
        event=event,
        registration_type=RegistrationType.TEAM,
        payment_status=False,
        total_participants=len(members),
        registration_fee=event.registration_fee * len(members),
    )
    participants = [
        Participant.objects.create(reservation=reservation, event=event, **_participant_kwargs(member))
        for member in members
    ]
    _increment_participants(event, len(members))
    _queue_confirmation(reservation)

    logger.info(
        "team_registration_created",
        reservation_id=reservation.id,
        event_id=event.id,
        team_size=len(members),
    )
    return RegistrationResult(reservation=reservation, participants=participants)


def create_registration(event_id: str, payload: schema.RegistrationCreateSchema) -> RegistrationResult:
    """Create a team registration when the payload lists participants, an individual one otherwise."""
    if payload.is_team:
        return create_team_registration(event_id, payload)
    return create_individual_registration(event_id, payload)
