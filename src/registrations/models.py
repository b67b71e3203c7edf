import typing as t

from django.core.validators import MinValueValidator
from django.db import models

from common.models import TimeStampedModel
from events.models import Event


class RegistrationType(models.TextChoices):
    INDIVIDUAL = "individual", "Individual"
    TEAM = "team", "Team"


class ReservationQuerySet(models.QuerySet["Reservation"]):
    def for_event(self, event_id: str) -> t.Self:
        return self.filter(event_id=event_id)

    def paid(self) -> t.Self:
        return self.filter(payment_status=True)


class Reservation(TimeStampedModel):
    """A registration of one or more participants to an event."""

    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name="reservations")
    registration_type = models.CharField(max_length=20, choices=RegistrationType.choices)
    payment_status = models.BooleanField(default=False)
    payment_date = models.DateTimeField(null=True, blank=True)
    total_participants = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    registration_fee = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])

    objects = ReservationQuerySet.as_manager()

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.registration_type} reservation {self.id}"


class Participant(TimeStampedModel):
    reservation = models.ForeignKey(Reservation, on_delete=models.CASCADE, related_name="participants")
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name="participants")
    email = models.CharField(max_length=254)
    first_name = models.CharField(max_length=255)
    last_name = models.CharField(max_length=255)

    phone = models.CharField(max_length=50, blank=True, default="")
    date_of_birth = models.CharField(max_length=50, blank=True, default="")
    gender = models.CharField(max_length=50, blank=True, default="")

    address = models.CharField(max_length=500, blank=True, default="")
    city = models.CharField(max_length=255, blank=True, default="")
    state = models.CharField(max_length=255, blank=True, default="")
    zip_code = models.CharField(max_length=50, blank=True, default="")
    country = models.CharField(max_length=255, blank=True, default="")

    emergency_name = models.CharField(max_length=255, blank=True, default="")
    emergency_relationship = models.CharField(max_length=255, blank=True, default="")
    emergency_phone = models.CharField(max_length=50, blank=True, default="")
    emergency_email = models.CharField(max_length=255, blank=True, default="")

    shirt_size = models.CharField(max_length=20, blank=True, default="")
    dietary_restrictions = models.TextField(blank=True, default="")
    medical_conditions = models.TextField(blank=True, default="")
    medications = models.TextField(blank=True, default="")
    allergies = models.TextField(blank=True, default="")

    waiver = models.BooleanField(default=False)
    newsletter = models.BooleanField(default=False)
    role = models.CharField(max_length=100, blank=True, default="")

    class Meta:
        ordering = ["reservation_id", "created_at"]
        constraints = [
            models.UniqueConstraint(fields=["event", "email"], name="unique_participant_email_per_event"),
        ]

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} <{self.email}>"
