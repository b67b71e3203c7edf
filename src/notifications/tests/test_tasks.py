import pytest
from django.core import mail

from notifications import tasks
from registrations.models import Reservation
from registrations.service.registration_service import RegistrationResult

pytestmark = pytest.mark.django_db


class TestSendRegistrationConfirmation:
    def test_individual_email(self, individual_registration: RegistrationResult) -> None:
        # Arrange
        mail.outbox.clear()
        reservation = individual_registration.reservation

        # Act
        sent = tasks.send_registration_confirmation(reservation.id)

        # Assert
        assert sent is True
        assert len(mail.outbox) == 1
        email = mail.outbox[0]
        assert email.to == ["ana.lopez@example.com"]
        assert email.subject == "Registration Confirmation - Cancun Marathon"
        assert f"PAY-{reservation.id[-10:].upper()}" in email.body
        assert "CLABE 012345678901234567" in email.body
        assert "50.00" in email.body
        html, mimetype = email.alternatives[0]
        assert mimetype == "text/html"
        assert "Cancun Marathon" in html

    def test_team_email_lists_members(self, team_registration: RegistrationResult) -> None:
        mail.outbox.clear()

        tasks.send_registration_confirmation(team_registration.reservation.id)

        email = mail.outbox[0]
        assert email.to == ["captain@example.com"]
        assert email.subject == "Team Registration Confirmation - Jungle Relay"
        assert "Beto Ruiz (cyclist)" in email.body
        assert "Carla Diaz (swimmer) [captain]" in email.body

    def test_disabled(self, settings, individual_registration: RegistrationResult) -> None:  # type: ignore[no-untyped-def]
        settings.NOTIFICATIONS_ENABLED = False
        mail.outbox.clear()

        assert tasks.send_registration_confirmation(individual_registration.reservation.id) is False
        assert mail.outbox == []

    def test_missing_reservation(self) -> None:
        assert tasks.send_registration_confirmation("01ARZ3NDEKTSV4RRFFQ69G5FAV") is False
        assert mail.outbox == []


class TestSendPaymentConfirmation:
    def test_paid_reservation(self, individual_registration: RegistrationResult) -> None:
        reservation = individual_registration.reservation
        Reservation.objects.filter(pk=reservation.pk).update(payment_status=True)
        mail.outbox.clear()

        assert tasks.send_payment_confirmation(reservation.id) is True

        email = mail.outbox[0]
        assert email.subject == "Payment Confirmed - Cancun Marathon"
        assert f"CONF-{reservation.id[-10:].upper()}" in email.body

    def test_unpaid_reservation_is_skipped(self, individual_registration: RegistrationResult) -> None:
        mail.outbox.clear()

        assert tasks.send_payment_confirmation(individual_registration.reservation.id) is False
        assert mail.outbox == []
