import typing as t

from django.core.validators import MinValueValidator
from django.db import models

from common.models import TimeStampedModel

from .organizer import Organizer


class EventQuerySet(models.QuerySet["Event"]):
    def enabled(self) -> t.Self:
        """Events that are visible to the public."""
        return self.filter(is_enabled=True)

    def featured(self) -> t.Self:
        """Featured events that are visible to the public."""
        return self.enabled().filter(is_featured=True)

    def created_by(self, creator_id: str) -> t.Self:
        """All events created by a user, including disabled ones."""
        return self.filter(creator_id=creator_id)


class Event(TimeStampedModel):
    creator_id = models.CharField(max_length=255, db_index=True)
    organizer = models.ForeignKey(Organizer, on_delete=models.PROTECT, related_name="events")
    title = models.CharField(max_length=255)
    type = models.CharField(max_length=100, db_index=True)
    date = models.DateTimeField()
    is_featured = models.BooleanField(default=False, db_index=True)
    is_team_event = models.BooleanField(default=False)
    is_relay = models.BooleanField(null=True, blank=True)
    required_participants = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    max_participants = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    current_participants = models.PositiveIntegerField(default=0)
    location = models.CharField(max_length=255)
    description = models.TextField()
    distance = models.CharField(max_length=100)
    registration_fee = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    registration_deadline = models.DateTimeField()
    image = models.CharField(max_length=1000)
    difficulty = models.CharField(max_length=100, db_index=True)
    tags = models.JSONField(default=list, blank=True)
    slug = models.SlugField(max_length=100, unique=True)
    is_enabled = models.BooleanField(default=True, db_index=True)

    objects = EventQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.title

    @property
    def registration_type(self) -> str:
        return "team" if self.is_team_event else "individual"

    @property
    def available_spots(self) -> int:
        return max(self.max_participants - self.current_participants, 0)
