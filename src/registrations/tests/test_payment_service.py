from datetime import datetime
from datetime import timezone as dt_timezone

import pytest
from django.core import mail
from freezegun import freeze_time

from common.authentication import ClerkUser
from common.exceptions import ForbiddenError, UnprocessableError
from registrations import schema
from registrations.service import payment_service
from registrations.service.registration_service import RegistrationResult

pytestmark = pytest.mark.django_db


class TestParsePaymentDate:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2024-01-15T10:30:00.000Z", datetime(2024, 1, 15, 10, 30, tzinfo=dt_timezone.utc)),
            ("2024-01-15T10:30:00Z", datetime(2024, 1, 15, 10, 30, tzinfo=dt_timezone.utc)),
            ("2024-01-15T10:30:00", datetime(2024, 1, 15, 10, 30, tzinfo=dt_timezone.utc)),
        ],
    )
    def test_valid(self, value: str, expected: datetime) -> None:
        assert payment_service.parse_payment_date(value) == expected

    @pytest.mark.parametrize("value", ["yesterday", "2024-01-15", "2024-13-45T10:30:00Z", "15/01/2024 10:30"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(UnprocessableError, match="paymentDate must be a valid ISO 8601 date string"):
            payment_service.parse_payment_date(value)


class TestUpdatePaymentStatus:
    @freeze_time("2025-03-01 12:00:00")
    def test_mark_paid_stamps_now(
        self, individual_registration: RegistrationResult, organizer_user: ClerkUser
    ) -> None:
        reservation = payment_service.update_payment_status(
            individual_registration.reservation.id,
            schema.PaymentStatusUpdateSchema(payment_status=True),
            organizer_user,
        )

        assert reservation.payment_status is True
        assert reservation.payment_date == datetime(2025, 3, 1, 12, 0, tzinfo=dt_timezone.utc)

    def test_mark_paid_with_explicit_date(
        self, individual_registration: RegistrationResult, organizer_user: ClerkUser
    ) -> None:
        reservation = payment_service.update_payment_status(
            individual_registration.reservation.id,
            schema.PaymentStatusUpdateSchema(payment_status=True, payment_date="2024-01-15T10:30:00.000Z"),
            organizer_user,
        )

        assert reservation.payment_date == datetime(2024, 1, 15, 10, 30, tzinfo=dt_timezone.utc)

    def test_mark_unpaid_clears_date(
        self, individual_registration: RegistrationResult, organizer_user: ClerkUser
    ) -> None:
        registration_id = individual_registration.reservation.id
        payment_service.update_payment_status(
            registration_id, schema.PaymentStatusUpdateSchema(payment_status=True), organizer_user
        )

        reservation = payment_service.update_payment_status(
            registration_id, schema.PaymentStatusUpdateSchema(payment_status=False), organizer_user
        )

        assert reservation.payment_status is False
        assert reservation.payment_date is None

    def test_confirmation_sent_only_on_transition_to_paid(
        self,
        individual_registration: RegistrationResult,
        organizer_user: ClerkUser,
        django_capture_on_commit_callbacks,  # type: ignore[no-untyped-def]
    ) -> None:
        # Arrange
        mail.outbox.clear()
        registration_id = individual_registration.reservation.id
        paid = schema.PaymentStatusUpdateSchema(payment_status=True)

        # Act
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            payment_service.update_payment_status(registration_id, paid, organizer_user)
            payment_service.update_payment_status(registration_id, paid, organizer_user)

        # Assert
        assert len(callbacks) == 1
        assert len(mail.outbox) == 1
        assert mail.outbox[0].subject == "Payment Confirmed - Cancun Marathon"

    def test_payment_status_required(
        self, individual_registration: RegistrationResult, organizer_user: ClerkUser
    ) -> None:
        with pytest.raises(UnprocessableError, match="paymentStatus must be a boolean value"):
            payment_service.update_payment_status(
                individual_registration.reservation.id, schema.PaymentStatusUpdateSchema(), organizer_user
            )

    def test_other_organizer_is_forbidden(
        self, individual_registration: RegistrationResult, other_organizer_user: ClerkUser
    ) -> None:
        with pytest.raises(ForbiddenError) as exc_info:
            payment_service.update_payment_status(
                individual_registration.reservation.id,
                schema.PaymentStatusUpdateSchema(payment_status=True),
                other_organizer_user,
            )

        assert exc_info.value.message == (
            "Access denied. You can only update payment status for registrations in events you created."
        )

    def test_admin_may_update_any(
        self, individual_registration: RegistrationResult, admin_clerk_user: ClerkUser
    ) -> None:
        reservation = payment_service.update_payment_status(
            individual_registration.reservation.id,
            schema.PaymentStatusUpdateSchema(payment_status=True),
            admin_clerk_user,
        )

        assert reservation.payment_status is True
