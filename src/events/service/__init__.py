import typing as t

from django.db import models, transaction

T = t.TypeVar("T", bound=models.Model)


@transaction.atomic
def update_db_instance(instance: T, data: dict[str, t.Any] | None = None, **kwargs: t.Any) -> T:
    """Updates a DB instance with the given fields, safely within a select_for_update lock."""
    instance = instance.__class__.objects.select_for_update().get(pk=instance.pk)  # type: ignore[attr-defined]
    values = dict(data or {})
    values.update(**kwargs)
    for key, value in values.items():
        setattr(instance, key, value)
    instance.save()
    return instance
