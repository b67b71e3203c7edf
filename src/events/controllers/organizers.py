from ninja_extra import api_controller, route

from common.authentication import ClerkAuth
from common.permissions import organizer_or_admin
from common.schema import Envelope
from common.throttling import WriteThrottle
from events import schema
from events.service import organizer_service

from .user_aware_controller import UserAwareController


@api_controller("/organizers", auth=ClerkAuth(), permissions=[organizer_or_admin()], tags=["Organizer"])
class OrganizerController(UserAwareController):
    @route.post(
        "",
        url_name="organizers",
        response={200: Envelope[schema.OrganizerResponse], 201: Envelope[schema.OrganizerResponse]},
        throttle=WriteThrottle(),
    )
    def create_organizer(self, payload: schema.OrganizerCreateSchema) -> tuple[int, dict]:  # type: ignore[type-arg]
        """Create the organizer profile of the current user.

        Calling this again returns the existing profile unchanged with status 200.
        """
        organizer, created = organizer_service.create_organizer(payload, self.user())
        if created:
            return 201, {"data": {"organizer": organizer}, "message": "Organizer created successfully"}
        return 200, {"data": {"organizer": organizer}, "message": "Organizer already exists"}

    @route.get("/me", url_name="get_my_organizer", response=Envelope[schema.OrganizerResponse])
    def get_my_organizer(self) -> dict:  # type: ignore[type-arg]
        """Get the organizer profile owned by the current user."""
        organizer = organizer_service.get_organizer_by_clerk_id(self.user().id)
        return {"data": {"organizer": organizer}}

    @route.get("/{organizer_id}", url_name="organizer_detail", response=Envelope[schema.OrganizerResponse])
    def get_organizer(self, organizer_id: str) -> dict:  # type: ignore[type-arg]
        """Get an organizer by id."""
        return {"data": {"organizer": organizer_service.get_organizer(organizer_id)}}

    @route.put(
        "/{organizer_id}",
        url_name="organizer_detail",
        response=Envelope[schema.OrganizerResponse],
        throttle=WriteThrottle(),
    )
    def update_organizer(self, organizer_id: str, payload: schema.OrganizerUpdateSchema) -> dict:  # type: ignore[type-arg]
        """Update an organizer. Only its owner or an admin may do this."""
        organizer = organizer_service.update_organizer(organizer_id, payload, self.user())
        return {"data": {"organizer": organizer}, "message": "Organizer updated successfully"}

    @route.delete("/{organizer_id}", url_name="organizer_detail", response={204: None}, throttle=WriteThrottle())
    def delete_organizer(self, organizer_id: str) -> tuple[int, None]:
        """Delete an organizer that no longer has events."""
        organizer_service.delete_organizer(organizer_id, self.user())
        return 204, None
