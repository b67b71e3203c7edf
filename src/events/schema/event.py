"""Event-related schemas."""

from datetime import datetime
from decimal import Decimal

from django.db.models import Q
from ninja import Field, FilterSchema, Schema
from pydantic import StrictBool

from common.schema import PaginationSchema


class EventCreateSchema(Schema):
    """Schema for creating an event.

    Required fields are declared optional here and checked by the controller, which
    reports the first missing field as a bad request.
    """

    title: str | None = None
    type: str | None = None
    date: datetime | None = None
    is_team_event: StrictBool | None = None
    is_relay: bool | None = None
    required_participants: int | None = None
    max_participants: int | None = None
    location: str | None = None
    description: str | None = None
    distance: str | None = None
    registration_fee: Decimal | None = None
    registration_deadline: datetime | None = None
    image: str | None = None
    difficulty: str | None = None
    tags: list[str] = Field(default_factory=list)
    organizer_id: str | None = None


class EventUpdateSchema(Schema):
    """Schema for a partial event update.

    Read-only fields are accepted so that they can be reported or ignored explicitly.
    """

    title: str | None = None
    type: str | None = None
    date: datetime | None = None
    is_relay: bool | None = None
    required_participants: int | None = Field(None, gt=0)
    max_participants: int | None = Field(None, gt=0)
    location: str | None = None
    description: str | None = None
    distance: str | None = None
    registration_fee: Decimal | None = Field(None, ge=0)
    registration_deadline: datetime | None = None
    image: str | None = None
    difficulty: str | None = None
    tags: list[str] | None = None
    is_enabled: bool | None = None
    is_featured: bool | None = None
    organizer_id: str | None = None
    # read-only
    slug: str | None = None
    id: str | None = None
    creator_id: str | None = None
    created_at: datetime | None = None
    current_participants: int | None = None
    is_team_event: bool | None = None


class EventSchema(Schema):
    id: str
    creator_id: str
    organizer_id: str
    title: str
    type: str
    date: datetime
    is_featured: bool
    is_team_event: bool
    is_relay: bool | None = None
    required_participants: int
    max_participants: int
    current_participants: int
    location: str
    description: str
    distance: str
    registration_fee: Decimal
    registration_deadline: datetime
    image: str
    difficulty: str
    tags: list[str]
    slug: str
    is_enabled: bool
    created_at: datetime
    updated_at: datetime


class EventResponse(Schema):
    event: EventSchema


class EventListResponse(Schema):
    events: list[EventSchema]
    pagination: PaginationSchema


class ListQuerySchema(Schema):
    limit: int | None = Field(None, ge=1, le=100)
    next_token: str | None = None


class EventFilterSchema(FilterSchema):
    """Filter public events by type, or by difficulty when no type is given."""

    type: str | None = None
    difficulty: str | None = None

    def filter_type(self, value: str | None) -> Q:
        return Q(type=value) if value else Q()

    def filter_difficulty(self, value: str | None) -> Q:
        if not value or self.type:
            return Q()
        return Q(difficulty=value)
