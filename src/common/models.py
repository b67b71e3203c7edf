import typing as t

from django.db import models

from .utils import new_ulid


class TimeStampedModel(models.Model):
    id = models.CharField(primary_key=True, max_length=26, default=new_ulid, editable=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        abstract = True

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Override the save method to call full_clean before saving."""
        self.full_clean()
        super().save(*args, **kwargs)
