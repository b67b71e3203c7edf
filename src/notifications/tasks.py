"""Notification tasks.

Tasks receive reservation ids only and reload everything they render, so a message
is never built from stale data captured when the task was queued.
"""

import typing as t

import structlog
from celery import shared_task
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from pydantic import BaseModel

from registrations.models import RegistrationType, Reservation

from .messages import build_payment_confirmation_message, build_registration_message

logger = structlog.get_logger(__name__)


def send_email(*, to: str | list[str], subject: str, body: str, html_body: str | None = None) -> None:
    """Send a multipart email.

    Args:
        to (str | list[str]): The recipient address or addresses.
        subject (str): The email subject.
        body (str): The plain text body.
        html_body (str | None): The HTML body.
    """
    recipients = [to] if isinstance(to, str) else to
    email_msg = EmailMultiAlternatives(
        subject=subject,
        body=body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=recipients,
    )
    if html_body:  # pragma: no branch
        email_msg.attach_alternative(html_body, "text/html")
    email_msg.send(fail_silently=False)


def render_email(template: str, message: BaseModel) -> tuple[str, str]:
    """Render the text and HTML variants of ``notifications/emails/<template>``."""
    context: dict[str, t.Any] = {"message": message, "site_name": settings.SITE_NAME}
    body = render_to_string(f"notifications/emails/{template}.txt", context)
    html_body = render_to_string(f"notifications/emails/{template}.html", context)
    return body, html_body


def _load_reservation(reservation_id: str) -> Reservation | None:
    reservation = Reservation.objects.select_related("event").filter(pk=reservation_id).first()
    if reservation is None:
        logger.warning("notification_reservation_missing", reservation_id=reservation_id)
    return reservation


@shared_task
def send_registration_confirmation(reservation_id: str) -> bool:
    """Email the registration confirmation with the payment instructions.

    Returns:
        bool: whether an email was sent.
    """
    if not settings.NOTIFICATIONS_ENABLED:
        logger.info("notifications_disabled", reservation_id=reservation_id)
        return False
    reservation = _load_reservation(reservation_id)
    if reservation is None:
        return False

    message = build_registration_message(reservation)
    if reservation.registration_type == RegistrationType.TEAM:
        template = "registration_team"
        subject = f"Team Registration Confirmation - {message.event.name}"
    else:
        template = "registration_individual"
        subject = f"Registration Confirmation - {message.event.name}"
    body, html_body = render_email(template, message)
    send_email(to=message.participant.email, subject=subject, body=body, html_body=html_body)

    logger.info(
        "registration_confirmation_sent",
        reservation_id=reservation.id,
        registration_type=reservation.registration_type,
    )
    return True


@shared_task
def send_payment_confirmation(reservation_id: str) -> bool:
    """Email the payment confirmation for a reservation marked as paid.

    Returns:
        bool: whether an email was sent.
    """
    if not settings.NOTIFICATIONS_ENABLED:
        logger.info("notifications_disabled", reservation_id=reservation_id)
        return False
    reservation = _load_reservation(reservation_id)
    if reservation is None:
        return False
    if not reservation.payment_status:
        logger.info("payment_confirmation_skipped_unpaid", reservation_id=reservation.id)
        return False

    message = build_payment_confirmation_message(reservation)
    body, html_body = render_email("payment_confirmed", message)
    send_email(
        to=message.participant.email,
        subject=f"Payment Confirmed - {message.event.name}",
        body=body,
        html_body=html_body,
    )

    logger.info("payment_confirmation_sent", reservation_id=reservation.id)
    return True
