"""Slug generation for events.

Slugs are derived from the event title, are unique across all events and never
change once the event exists.
"""

import re
import typing as t

import structlog

from common.exceptions import BadRequestError
from events.models import Event

logger = structlog.get_logger(__name__)

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
SLUG_MAX_LENGTH = 100
MAX_SLUG_ATTEMPTS = 1000


def sanitize_slug(text: str) -> str:
    """Turn arbitrary text into a URL-safe slug.

    >>> sanitize_slug("  Hello, World!  2024 ")
    'hello-world-2024'
    """
    slug = text.lower().strip()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", " ", slug)
    slug = slug.replace(" ", "-")
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def is_valid_slug(slug: t.Any) -> bool:
    if not isinstance(slug, str) or not 1 <= len(slug) <= SLUG_MAX_LENGTH:
        return False
    return bool(SLUG_PATTERN.match(slug))


def slug_exists(slug: str) -> bool:
    return Event.objects.filter(slug=slug).exists()


def slug_candidate(base: str, counter: int) -> str:
    """Suffix ``base`` with ``-counter``, shortening the base so the result stays a valid slug."""
    suffix = f"-{counter}"
    return base[: SLUG_MAX_LENGTH - len(suffix)].rstrip("-") + suffix


def generate_unique_slug(title: t.Any) -> str:
    """Generate a slug from a title that no event uses yet.

    Tries ``base``, then ``base-1``, ``base-2`` and so on. Long bases are shortened to make
    room for the counter.

    Raises:
        BadRequestError: If the title cannot produce a valid slug or every candidate is taken.
    """
    if not isinstance(title, str) or not title.strip():
        raise BadRequestError("Title is required and must be a string")

    base = sanitize_slug(title)
    if not base:
        raise BadRequestError("Title must contain at least one alphanumeric character")
    if not is_valid_slug(base):
        raise BadRequestError("Generated slug does not meet format requirements")

    if not slug_exists(base):
        return base

    for counter in range(1, MAX_SLUG_ATTEMPTS + 1):
        candidate = slug_candidate(base, counter)
        if not slug_exists(candidate):
            logger.debug("slug_collision_resolved", base=base, slug=candidate, attempts=counter)
            return candidate

    logger.warning("slug_generation_exhausted", base=base)
    raise BadRequestError(f"Unable to generate unique slug after {MAX_SLUG_ATTEMPTS} attempts")
