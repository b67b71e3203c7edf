"""Token pagination over ULID-keyed querysets.

Rows are returned newest first. The ``next_token`` of a page is the id of its
last row, and the next page continues strictly after it.
"""

import typing as t
from dataclasses import dataclass

from django.conf import settings
from django.db.models import Model, QuerySet

from .exceptions import BadRequestError
from .utils import is_valid_ulid

M = t.TypeVar("M", bound=Model)


@dataclass
class Page(t.Generic[M]):
    items: list[M]
    has_next_page: bool
    next_token: str | None
    limit: int

    def pagination(self) -> dict[str, t.Any]:
        return {
            "has_next_page": self.has_next_page,
            "next_token": self.next_token,
            "limit": self.limit,
            "count": len(self.items),
        }


def clamp_limit(limit: int | None, default: int) -> int:
    """Apply the default and keep the limit within bounds."""
    if limit is None:
        return default
    return max(1, min(limit, settings.PAGINATION_MAX_LIMIT))


def paginate_queryset(qs: QuerySet[M], limit: int, next_token: str | None = None) -> Page[M]:
    """Return one page of ``qs`` ordered by descending id.

    One extra row is fetched to know whether another page follows.

    Raises:
        BadRequestError: If ``next_token`` is not a valid token.
    """
    if next_token:
        if not is_valid_ulid(next_token):
            raise BadRequestError("Invalid nextToken.")
        qs = qs.filter(pk__lt=next_token)
    rows = list(qs.order_by("-pk")[: limit + 1])
    has_next_page = len(rows) > limit
    items = rows[:limit]
    return Page(
        items=items,
        has_next_page=has_next_page,
        next_token=str(items[-1].pk) if has_next_page else None,
        limit=limit,
    )
