"""Registration-related schemas."""

import typing as t
from datetime import datetime
from decimal import Decimal

from ninja import Schema
from pydantic import StrictBool


class ParticipantInputSchema(Schema):
    """Participant data as submitted. Required fields are checked by the registration service."""

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    date_of_birth: str | None = None
    gender: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    emergency_name: str | None = None
    emergency_relationship: str | None = None
    emergency_phone: str | None = None
    emergency_email: str | None = None
    shirt_size: str | None = None
    dietary_restrictions: str | None = None
    medical_conditions: str | None = None
    medications: str | None = None
    allergies: str | None = None
    waiver: StrictBool | None = None
    newsletter: StrictBool | None = None
    role: str | None = None


class RegistrationCreateSchema(ParticipantInputSchema):
    """Body of a registration request.

    With ``participants`` it is a team registration and the top-level fields are team-level
    defaults; without it the top-level fields describe the single participant.
    """

    participants: list[ParticipantInputSchema] | None = None

    @property
    def is_team(self) -> bool:
        return self.participants is not None


class IndividualRegistrationSchema(Schema):
    reservation_id: str
    participant_id: str
    event_id: str
    email: str
    payment_status: bool
    registration_fee: Decimal
    registration_type: t.Literal["individual"] = "individual"
    created_at: datetime


class TeamMemberSchema(Schema):
    participant_id: str
    email: str
    first_name: str
    last_name: str
    role: str | None = None


class TeamRegistrationSchema(Schema):
    reservation_id: str
    event_id: str
    participants: list[TeamMemberSchema]
    total_participants: int
    registration_fee: Decimal
    payment_status: bool
    registration_type: t.Literal["team"] = "team"
    created_at: datetime


class ParticipantSchema(Schema):
    participant_id: str
    reservation_id: str
    event_id: str
    email: str
    first_name: str
    last_name: str
    phone: str
    date_of_birth: str
    gender: str
    address: str
    city: str
    state: str
    zip_code: str
    country: str
    emergency_name: str
    emergency_relationship: str
    emergency_phone: str
    emergency_email: str
    shirt_size: str
    dietary_restrictions: str
    medical_conditions: str
    medications: str
    allergies: str
    waiver: bool
    newsletter: bool
    role: str
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def resolve_participant_id(obj: t.Any) -> str:
        return str(obj.id)


class ParticipantWithRegistrationSchema(ParticipantSchema):
    registration_type: str
    payment_status: bool
    total_participants: int
    registration_fee: Decimal
    registration_created_at: datetime

    @staticmethod
    def resolve_registration_type(obj: t.Any) -> str:
        return str(obj.reservation.registration_type)

    @staticmethod
    def resolve_payment_status(obj: t.Any) -> bool:
        return bool(obj.reservation.payment_status)

    @staticmethod
    def resolve_total_participants(obj: t.Any) -> int:
        return int(obj.reservation.total_participants)

    @staticmethod
    def resolve_registration_fee(obj: t.Any) -> Decimal:
        return t.cast(Decimal, obj.reservation.registration_fee)

    @staticmethod
    def resolve_registration_created_at(obj: t.Any) -> datetime:
        return t.cast(datetime, obj.reservation.created_at)


class RegistrationSummarySchema(Schema):
    total_registrations: int
    paid_registrations: int
    unpaid_registrations: int
    individual_registrations: int
    team_registrations: int


class EventParticipantsSchema(Schema):
    event_id: str
    participants: list[ParticipantWithRegistrationSchema]
    total_count: int
    registration_summary: RegistrationSummarySchema


class ReservationSchema(Schema):
    reservation_id: str
    event_id: str
    registration_type: str
    payment_status: bool
    payment_date: datetime | None = None
    total_participants: int
    registration_fee: Decimal
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def resolve_reservation_id(obj: t.Any) -> str:
        return str(obj.id)


class EventSummarySchema(Schema):
    event_id: str
    title: str
    creator_id: str


class RegistrationDetailSchema(Schema):
    registration: ReservationSchema
    participants: list[ParticipantSchema]
    event: EventSummarySchema


class RegistrationDeletedSchema(Schema):
    reservation_id: str
    event_id: str
    deleted_participant_count: int


class PaymentStatusUpdateSchema(Schema):
    payment_status: StrictBool | None = None
    payment_date: str | None = None


class PaymentStatusSchema(Schema):
    reservation_id: str
    payment_status: bool
    payment_date: datetime | None = None
    total_participants: int
    updated_at: datetime
