"""Notification payloads built from reservations.

Each payload is a pydantic model so the Celery tasks and the templates share one
well-defined shape for the data they render.
"""

from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from django.conf import settings
from django.utils import timezone
from pydantic import BaseModel, Field

from notifications.enums import NotificationType
from registrations.models import Participant, RegistrationType, Reservation

PAYMENT_REFERENCE_PREFIX = "PAY-"
CONFIRMATION_NUMBER_PREFIX = "CONF-"
REFERENCE_SUFFIX_LENGTH = 10


class EventInfo(BaseModel):
    name: str
    date: str
    time: str
    location: str


class ParticipantInfo(BaseModel):
    email: str
    first_name: str
    last_name: str
    participant_id: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class TeamMemberInfo(BaseModel):
    name: str
    email: str
    role: str
    is_captain: bool = False


class TeamInfo(BaseModel):
    name: str
    members: list[TeamMemberInfo] = Field(default_factory=list)


class RegistrationPaymentInfo(BaseModel):
    amount: str
    bank_account: str
    payment_reference: str


class ConfirmedPaymentInfo(BaseModel):
    amount: str
    confirmation_number: str
    transfer_reference: str
    payment_date: str


class RegistrationMessage(BaseModel):
    type: str = NotificationType.REGISTRATION_SUCCESS.value
    registration_type: str
    event_id: str
    reservation_id: str
    participant: ParticipantInfo
    team: TeamInfo | None = None
    event: EventInfo
    payment: RegistrationPaymentInfo
    timestamp: datetime = Field(default_factory=timezone.now)


class PaymentConfirmationMessage(BaseModel):
    type: str = NotificationType.PAYMENT_CONFIRMED.value
    event_id: str
    reservation_id: str
    participant: ParticipantInfo
    event: EventInfo
    payment: ConfirmedPaymentInfo
    timestamp: datetime = Field(default_factory=timezone.now)


def format_amount(amount: Decimal | float | int) -> str:
    """Format a fee with exactly two decimals."""
    return f"{Decimal(amount):.2f}"


def format_event_datetime(value: datetime) -> tuple[str, str]:
    """Render an event datetime as (date, time) strings in the notifications timezone."""
    local = value.astimezone(ZoneInfo(settings.NOTIFICATIONS_TIMEZONE))
    return local.strftime("%a, %b %d, %Y"), local.strftime("%I:%M %p").lstrip("0")


def payment_reference(reservation_id: str) -> str:
    return PAYMENT_REFERENCE_PREFIX + reservation_id[-REFERENCE_SUFFIX_LENGTH:].upper()


def confirmation_number(reservation_id: str) -> str:
    return CONFIRMATION_NUMBER_PREFIX + reservation_id[-REFERENCE_SUFFIX_LENGTH:].upper()


def _event_info(reservation: Reservation) -> EventInfo:
    event = reservation.event
    date, time = format_event_datetime(event.date)
    return EventInfo(name=event.title, date=date, time=time, location=event.location)


def _participant_info(participant: Participant) -> ParticipantInfo:
    return ParticipantInfo(
        email=participant.email,
        first_name=participant.first_name,
        last_name=participant.last_name,
        participant_id=participant.id,
    )


def _team_info(participants: list[Participant]) -> TeamInfo:
    captain = participants[0]
    members = [
        TeamMemberInfo(
            name=f"{member.first_name} {member.last_name}",
            email=member.email,
            role=member.role,
            is_captain=index == 0,
        )
        for index, member in enumerate(participants)
    ]
    return TeamInfo(name=f"{captain.first_name} {captain.last_name}'s team", members=members)


def _participants(reservation: Reservation) -> list[Participant]:
    participants = list(reservation.participants.all())
    if not participants:
        raise ValueError(f"Reservation {reservation.id} has no participants.")
    return participants


def build_registration_message(reservation: Reservation) -> RegistrationMessage:
    """Build the ``registration_success`` payload for a freshly created reservation.

    The first participant is the addressee; for team reservations it is the captain and
    the payload also lists every member.
    """
    participants = _participants(reservation)
    is_team = reservation.registration_type == RegistrationType.TEAM
    return RegistrationMessage(
        registration_type=reservation.registration_type,
        event_id=reservation.event_id,
        reservation_id=reservation.id,
        participant=_participant_info(participants[0]),
        team=_team_info(participants) if is_team else None,
        event=_event_info(reservation),
        payment=RegistrationPaymentInfo(
            amount=format_amount(reservation.registration_fee),
            bank_account=settings.PAYMENT_BANK_ACCOUNT,
            payment_reference=payment_reference(reservation.id),
        ),
    )


def build_payment_confirmation_message(reservation: Reservation) -> PaymentConfirmationMessage:
    """Build the ``payment_confirmed`` payload for a reservation marked as paid."""
    participants = _participants(reservation)
    paid_at = reservation.payment_date or timezone.now()
    return PaymentConfirmationMessage(
        event_id=reservation.event_id,
        reservation_id=reservation.id,
        participant=_participant_info(participants[0]),
        event=_event_info(reservation),
        payment=ConfirmedPaymentInfo(
            amount=format_amount(reservation.registration_fee),
            confirmation_number=confirmation_number(reservation.id),
            transfer_reference=payment_reference(reservation.id),
            payment_date=paid_at.isoformat(),
        ),
    )
