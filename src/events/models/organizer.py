import typing as t

from django.core.validators import RegexValidator
from django.db import models

from common.models import TimeStampedModel

WEBSITE_PATTERN = r"^https?://.+"


class OrganizerQuerySet(models.QuerySet["Organizer"]):
    def owned_by(self, clerk_id: str) -> t.Self:
        """Organizers owned by the given Clerk user."""
        return self.filter(clerk_id=clerk_id)


class Organizer(TimeStampedModel):
    clerk_id = models.CharField(max_length=255, unique=True, db_index=True)
    name = models.CharField(max_length=255)
    contact = models.CharField(max_length=255)
    website = models.CharField(
        max_length=500,
        blank=True,
        default="",
        validators=[RegexValidator(WEBSITE_PATTERN, message="Website must be a valid URL")],
    )
    description = models.TextField(max_length=1000, blank=True, default="")

    objects = OrganizerQuerySet.as_manager()

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
