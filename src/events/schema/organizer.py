"""Organizer-related schemas."""

from datetime import datetime

from ninja import Schema


class OrganizerCreateSchema(Schema):
    """Schema for creating an organizer.

    Fields are checked by the organizer service so that every rule reports its own message.
    """

    name: str | None = None
    contact: str | None = None
    website: str | None = None
    description: str | None = None


class OrganizerUpdateSchema(Schema):
    """Schema for a partial organizer update. An empty website or description clears it."""

    name: str | None = None
    contact: str | None = None
    website: str | None = None
    description: str | None = None


class OrganizerSchema(Schema):
    id: str
    clerk_id: str
    name: str
    contact: str
    website: str | None = None
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class OrganizerResponse(Schema):
    organizer: OrganizerSchema
