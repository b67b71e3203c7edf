from ninja import Query
from ninja_extra import api_controller, route

from common.authentication import ClerkAuth
from common.pagination import Page
from common.permissions import organizer_or_admin
from common.schema import Envelope
from common.throttling import WriteThrottle
from events import schema
from events.models import Event
from events.service import event_service

from .user_aware_controller import UserAwareController


def page_payload(page: Page[Event]) -> dict:  # type: ignore[type-arg]
    return {"data": {"events": page.items, "pagination": page.pagination()}}


@api_controller("/events", tags=["Events"])
class EventController(UserAwareController):
    @route.get("", url_name="events", response=Envelope[schema.EventListResponse])
    def list_events(
        self,
        filters: schema.EventFilterSchema = Query(...),  # type: ignore[type-arg]
        params: schema.ListQuerySchema = Query(...),  # type: ignore[type-arg]
    ) -> dict:  # type: ignore[type-arg]
        """Browse enabled events, newest first.

        Filter by `type`, or by `difficulty` when no type is given.
        """
        return page_payload(event_service.list_events(filters, params.limit, params.next_token))

    @route.get("/featured", url_name="list_featured_events", response=Envelope[schema.EventListResponse])
    def list_featured_events(self, params: schema.ListQuerySchema = Query(...)) -> dict:  # type: ignore[type-arg]
        """Browse featured events."""
        return page_payload(event_service.list_featured_events(params.limit, params.next_token))

    @route.get(
        "/user",
        url_name="list_my_events",
        response=Envelope[schema.EventListResponse],
        auth=ClerkAuth(),
        permissions=[organizer_or_admin()],
    )
    def list_my_events(self, params: schema.ListQuerySchema = Query(...)) -> dict:  # type: ignore[type-arg]
        """List every event created by the current user, including disabled ones."""
        return page_payload(event_service.list_events_by_creator(self.user(), params.limit, params.next_token))

    @route.get("/slug/{slug}", url_name="get_event_by_slug", response=Envelope[schema.EventResponse])
    def get_event_by_slug(self, slug: str) -> dict:  # type: ignore[type-arg]
        """Get an enabled event by its slug."""
        return {"data": {"event": event_service.get_event_by_slug(slug)}}

    @route.get("/{event_id}", url_name="event_detail", response=Envelope[schema.EventResponse])
    def get_event(self, event_id: str) -> dict:  # type: ignore[type-arg]
        """Get an event by id."""
        return {"data": {"event": event_service.get_event(event_id)}}

    @route.post(
        "",
        url_name="events",
        response={201: Envelope[schema.EventResponse]},
        auth=ClerkAuth(),
        permissions=[organizer_or_admin()],
        throttle=WriteThrottle(),
    )
    def create_event(self, payload: schema.EventCreateSchema) -> tuple[int, dict]:  # type: ignore[type-arg]
        """Create an event.

        The organizer defaults to the current user's organizer profile. A unique slug is
        generated from the title.
        """
        event = event_service.create_event(payload, self.user())
        return 201, {"data": {"event": event}, "message": "Event created successfully"}

    @route.put(
        "/{event_id}",
        url_name="event_detail",
        response=Envelope[schema.EventResponse],
        auth=ClerkAuth(),
        throttle=WriteThrottle(),
    )
    def update_event(self, event_id: str, payload: schema.EventUpdateSchema) -> dict:  # type: ignore[type-arg]
        """Update an event. Only its creator or an admin may do this."""
        event = event_service.update_event(event_id, payload, self.user())
        return {"data": {"event": event}, "message": "Event updated successfully"}

    @route.delete(
        "/{event_id}",
        url_name="event_detail",
        response={204: None},
        auth=ClerkAuth(),
        throttle=WriteThrottle(),
    )
    def delete_event(self, event_id: str) -> tuple[int, None]:
        """Delete an event without registrations."""
        event_service.delete_event(event_id, self.user())
        return 204, None
