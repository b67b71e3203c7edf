from .event import (
    EventCreateSchema,
    EventFilterSchema,
    EventListResponse,
    EventResponse,
    EventSchema,
    EventUpdateSchema,
    ListQuerySchema,
)
from .organizer import (
    OrganizerCreateSchema,
    OrganizerResponse,
    OrganizerSchema,
    OrganizerUpdateSchema,
)

__all__ = [
    # Events
    "EventCreateSchema",
    "EventFilterSchema",
    "EventListResponse",
    "EventResponse",
    "EventSchema",
    "EventUpdateSchema",
    "ListQuerySchema",
    # Organizers
    "OrganizerCreateSchema",
    "OrganizerResponse",
    "OrganizerSchema",
    "OrganizerUpdateSchema",
]
