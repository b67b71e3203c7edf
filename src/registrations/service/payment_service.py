"""Payment status tracking for registrations."""

import re
from datetime import datetime
from datetime import timezone as dt_timezone

import structlog
from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from common.authentication import ROLE_ORGANIZER, ClerkUser
from common.exceptions import ForbiddenError, UnprocessableError
from notifications import tasks as notification_tasks
from registrations import schema
from registrations.models import Reservation

from .participant_service import get_reservation_for_user

logger = structlog.get_logger(__name__)

PAYMENT_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{3})?Z?$")


def parse_payment_date(value: str) -> datetime:
    """Parse an ISO timestamp such as ``2024-01-15T10:30:00.000Z``. Naive values are UTC."""
    try:
        parsed = parse_datetime(value) if PAYMENT_DATE_PATTERN.match(value) else None
    except ValueError:
        parsed = None
    if parsed is None:
        raise UnprocessableError(
            "paymentDate must be a valid ISO 8601 date string", details={"payment_date": value}
        )
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed


def validate_payment_access(reservation: Reservation, user: ClerkUser) -> None:
    if user.is_admin:
        return
    if user.role == ROLE_ORGANIZER and reservation.event.creator_id == user.id:
        return
    raise ForbiddenError(
        "Access denied. You can only update payment status for registrations in events you created.",
        details={"reservation_id": reservation.id},
    )


@transaction.atomic
def update_payment_status(
    reservation_id: str, payload: schema.PaymentStatusUpdateSchema, user: ClerkUser
) -> Reservation:
    """Mark a registration as paid or unpaid.

    Marking it paid stamps the payment date (given or now) and queues a confirmation email.
    Marking it unpaid clears the date.
    """
    if payload.payment_status is None:
        raise UnprocessableError("paymentStatus must be a boolean value")
    payment_date = parse_payment_date(payload.payment_date) if payload.payment_date else None

    reservation = get_reservation_for_user(reservation_id, user, lock=True, check_access=False)
    validate_payment_access(reservation, user)

    was_paid = reservation.payment_status
    reservation.payment_status = payload.payment_status
    reservation.payment_date = (payment_date or timezone.now()) if payload.payment_status else None
    reservation.save(update_fields=["payment_status", "payment_date", "updated_at"])

    if payload.payment_status and not was_paid:
        transaction.on_commit(lambda: notification_tasks.send_payment_confirmation.delay(reservation.id))

    logger.info(
        "payment_status_updated",
        reservation_id=reservation.id,
        payment_status=reservation.payment_status,
        updated_by=user.id,
    )
    return reservation
