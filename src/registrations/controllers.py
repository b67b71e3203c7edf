import typing as t

from ninja_extra import api_controller, route

from common.authentication import ClerkAuth
from common.permissions import organizer_or_admin
from common.schema import Envelope
from common.throttling import RegistrationThrottle
from events.controllers.user_aware_controller import UserAwareController
from registrations import schema
from registrations.models import RegistrationType
from registrations.service import participant_service, payment_service, registration_service
from registrations.service.registration_service import RegistrationResult

RegistrationCreatedSchema = schema.IndividualRegistrationSchema | schema.TeamRegistrationSchema


def registration_payload(result: RegistrationResult) -> dict[str, t.Any]:
    reservation = result.reservation
    common = {
        "reservation_id": reservation.id,
        "event_id": reservation.event_id,
        "payment_status": reservation.payment_status,
        "registration_fee": reservation.registration_fee,
        "created_at": reservation.created_at,
    }
    if reservation.registration_type == RegistrationType.INDIVIDUAL:
        participant = result.participants[0]
        return {
            **common,
            "participant_id": participant.id,
            "email": participant.email,
            "registration_type": "individual",
        }
    return {
        **common,
        "participants": [
            {
                "participant_id": p.id,
                "email": p.email,
                "first_name": p.first_name,
                "last_name": p.last_name,
                "role": p.role or None,
            }
            for p in result.participants
        ],
        "total_participants": reservation.total_participants,
        "registration_type": "team",
    }


@api_controller("/events", tags=["Registrations"])
class EventRegistrationController(UserAwareController):
    @route.post(
        "/{event_id}/registrations",
        url_name="event_registrations",
        response={201: Envelope[RegistrationCreatedSchema]},  # type: ignore[valid-type]
        throttle=RegistrationThrottle(),
    )
    def create_registration(self, event_id: str, payload: schema.RegistrationCreateSchema) -> tuple[int, dict]:  # type: ignore[type-arg]
        """Register for an event.

        Send `participants` to register a team; otherwise the top-level fields describe a
        single participant. No authentication is required.
        """
        result = registration_service.create_registration(event_id, payload)
        message = (
            "Team registration created successfully"
            if payload.is_team
            else "Individual registration created successfully"
        )
        return 201, {"data": registration_payload(result), "message": message}

    @route.get(
        "/{event_id}/registrations",
        url_name="event_registrations",
        response=Envelope[schema.EventParticipantsSchema],
        auth=ClerkAuth(),
        permissions=[organizer_or_admin()],
    )
    def list_participants(self, event_id: str) -> dict:  # type: ignore[type-arg]
        """List the participants of an event you created, with a registration summary."""
        return {"data": participant_service.get_participants_by_event(event_id, self.user())}


@api_controller("/registrations", auth=ClerkAuth(), permissions=[organizer_or_admin()], tags=["Registrations"])
class RegistrationController(UserAwareController):
    @route.get("/{reservation_id}", url_name="registration_detail", response=Envelope[schema.RegistrationDetailSchema])
    def get_registration(self, reservation_id: str) -> dict:  # type: ignore[type-arg]
        """Get a registration with its participants."""
        return {"data": participant_service.get_registration(reservation_id, self.user())}

    @route.delete(
        "/{reservation_id}", url_name="registration_detail", response=Envelope[schema.RegistrationDeletedSchema]
    )
    def delete_registration(self, reservation_id: str) -> dict:  # type: ignore[type-arg]
        """Delete a registration and free its spots on the event."""
        result = participant_service.delete_registration(reservation_id, self.user())
        return {"data": result, "message": "Registration deleted successfully"}

    @route.patch(
        "/{reservation_id}/payment",
        url_name="registration_payment",
        response=Envelope[schema.PaymentStatusSchema],
    )
    def update_payment_status(self, reservation_id: str, payload: schema.PaymentStatusUpdateSchema) -> dict:  # type: ignore[type-arg]
        """Mark a registration as paid or unpaid."""
        reservation = payment_service.update_payment_status(reservation_id, payload, self.user())
        status = "paid" if reservation.payment_status else "unpaid"
        return {
            "data": {
                "reservation_id": reservation.id,
                "payment_status": reservation.payment_status,
                "payment_date": reservation.payment_date,
                "total_participants": reservation.total_participants,
                "updated_at": reservation.updated_at,
            },
            "message": f"Payment status updated to {status} successfully",
        }
