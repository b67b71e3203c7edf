"""Enums for the notification system."""

from django.db.models import TextChoices


class NotificationType(TextChoices):
    """All notification types sent by the system."""

    REGISTRATION_SUCCESS = "registration_success"
    PAYMENT_CONFIRMED = "payment_confirmed"
