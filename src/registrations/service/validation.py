"""Participant validation and event availability checks for registrations."""

import re
import typing as t

import structlog
from django.utils import timezone

from common.exceptions import BadRequestError, ConflictError, NotFoundError, UnprocessableError
from common.utils import is_valid_ulid
from events.models import Event
from registrations.models import Participant, RegistrationType

logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
REQUIRED_PARTICIPANT_FIELDS = ("email", "first_name", "last_name")


def validate_event_id_format(event_id: str) -> None:
    if not is_valid_ulid(event_id):
        raise BadRequestError("Invalid eventId format. Must be a valid ULID.", details={"event_id": event_id})


def is_blank(value: t.Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_email(email: str) -> str:
    return email.strip().lower()


def participant_errors(data: dict[str, t.Any], required: t.Iterable[str] = REQUIRED_PARTICIPANT_FIELDS) -> list[str]:
    """Collect every problem with one participant's data."""
    missing = [field for field in required if is_blank(data.get(field))]
    if missing:
        return [f"Missing required fields: {', '.join(missing)}"]

    errors = []
    if not EMAIL_PATTERN.match(data["email"].strip()):
        errors.append("Invalid email format")
    if data.get("waiver") is not True:
        errors.append("Waiver must be accepted to complete registration")
    if data.get("emergency_email") and not EMAIL_PATTERN.match(data["emergency_email"].strip()):
        errors.append("Invalid emergency contact email format")
    return errors


def validate_individual_participant(data: dict[str, t.Any]) -> None:
    """Validate the participant of an individual registration.

    Raises:
        UnprocessableError: For the first problem found.
    """
    missing = [field for field in (*REQUIRED_PARTICIPANT_FIELDS, "waiver", "newsletter") if is_blank(data.get(field))]
    if missing:
        raise UnprocessableError(f"Missing required fields: {', '.join(missing)}", details={"missing_fields": missing})
    if errors := participant_errors(data):
        raise UnprocessableError(errors[0], details={"email": data.get("email")})


def validate_team_participants(participants: list[dict[str, t.Any]]) -> None:
    """Validate every member of a team registration.

    Raises:
        UnprocessableError: If the team is empty, a member is incomplete or invalid, or an
            email appears twice.
    """
    if not participants:
        raise UnprocessableError("Team registration must include at least one participant")

    for index, member in enumerate(participants):
        missing = [f for f in (*REQUIRED_PARTICIPANT_FIELDS, "role") if is_blank(member.get(f))]
        if missing:
            raise UnprocessableError(
                f"Participant at index {index} is missing required fields: {', '.join(missing)}",
                details={"participant_index": index, "missing_fields": missing},
            )
        for flag in ("waiver", "newsletter"):
            if member.get(flag) is None:
                raise UnprocessableError(
                    f"Participant at index {index}: {flag} is required (either at participant or team level)"
                )

    emails = [normalize_email(member["email"]) for member in participants]
    duplicates = sorted({email for email in emails if emails.count(email) > 1})
    if duplicates:
        raise UnprocessableError(
            "Team registration contains duplicate email addresses", details={"duplicate_emails": duplicates}
        )

    invalid = [
        {"index": index, "errors": errors}
        for index, member in enumerate(participants)
        if (errors := participant_errors(member))
    ]
    if invalid:
        raise UnprocessableError(
            "Team registration contains invalid participant data", details={"participant_errors": invalid}
        )


def validate_event_availability(event_id: str, registration_type: RegistrationType, *, lock: bool = False) -> Event:
    """Check that an event exists and accepts this kind of registration right now.

    With ``lock`` the event row is locked until the surrounding transaction ends.

    Raises:
        NotFoundError: If the event does not exist.
        ConflictError: If it is disabled, past its deadline, or configured for the other registration type.
    """
    qs = Event.objects.select_for_update() if lock else Event.objects.all()
    event = qs.filter(pk=event_id).first()
    if event is None:
        raise NotFoundError(f"Event with ID {event_id} not found")
    if not event.is_enabled:
        raise ConflictError(
            "Event is currently disabled and not accepting registrations", details={"event_id": event_id}
        )
    if timezone.now() > event.registration_deadline:
        raise ConflictError(
            "Registration deadline has passed for this event",
            details={"event_id": event_id, "registration_deadline": event.registration_deadline.isoformat()},
        )
    if event.registration_type != registration_type:
        raise ConflictError(
            f"Registration type mismatch. This event is configured for {event.registration_type} "
            "registration only.",
            details={
                "event_id": event_id,
                "event_registration_type": event.registration_type,
                "attempted_registration_type": str(registration_type),
            },
        )
    return event


def validate_individual_capacity(event: Event) -> None:
    if event.available_spots < 1:
        raise ConflictError(
            f"Event is at maximum capacity. Available spots: {event.available_spots}, requested: 1",
            details={
                "event_id": event.id,
                "max_participants": event.max_participants,
                "current_participants": event.current_participants,
            },
        )


def validate_team_capacity(event: Event, team_size: int) -> None:
    if team_size != event.required_participants:
        raise ConflictError(
            f"Team size must be exactly {event.required_participants} participants. Received: {team_size}",
            details={"required_participants": event.required_participants, "team_size": team_size},
        )
    if event.available_spots < team_size:
        raise ConflictError(
            "Event does not have sufficient capacity for team registration. "
            f"Available spots: {event.available_spots}, team size: {team_size}",
            details={
                "event_id": event.id,
                "available_spots": event.available_spots,
                "team_size": team_size,
            },
        )


def validate_emails_not_registered(event: Event, emails: list[str], *, team: bool = False) -> None:
    """Reject emails that already belong to a participant of this event.

    Team registrations always list every taken email, even for a team of one.
    """
    taken = sorted(
        set(Participant.objects.filter(event=event, email__in=emails).values_list("email", flat=True))
    )
    if not taken:
        return
    if not team:
        raise ConflictError(f"Email {taken[0]} is already registered for this event", details={"email": taken[0]})
    raise ConflictError(
        f"The following emails are already registered for this event: {', '.join(taken)}",
        details={"emails": taken},
    )
