"""Clerk session token verification.

Session tokens are RS256 JWTs. They are verified either against a PEM public
key (``CLERK_JWT_KEY``) or against the instance JWKS (``CLERK_JWKS_URL``).
"""

import typing as t
from functools import lru_cache

import httpx
import jwt
import structlog
from django.conf import settings
from django.core.cache import cache
from django.core.exceptions import ImproperlyConfigured
from jwt import PyJWKClient
from jwt.exceptions import InvalidTokenError

logger = structlog.get_logger(__name__)

CLERK_ALGORITHMS = ["RS256"]


@lru_cache(maxsize=4)
def get_jwks_client(url: str) -> PyJWKClient:
    """Return a cached JWKS client for the given URL."""
    return PyJWKClient(url, cache_keys=True)


def get_verification_key(token: str) -> t.Any:
    """Return the key used to verify the token signature."""
    if settings.CLERK_JWT_KEY:
        return settings.CLERK_JWT_KEY
    if settings.CLERK_JWKS_URL:
        return get_jwks_client(settings.CLERK_JWKS_URL).get_signing_key_from_jwt(token).key
    raise ImproperlyConfigured("Either CLERK_JWT_KEY or CLERK_JWKS_URL must be configured.")


def verify_session_token(token: str) -> dict[str, t.Any]:
    """Verify a Clerk session token and return its claims.

    Raises:
        InvalidTokenError: If the signature, expiry, issuer or authorized party is invalid.
    """
    key = get_verification_key(token)
    options: dict[str, t.Any] = {"verify_aud": False, "require": ["sub", "exp"]}
    claims: dict[str, t.Any] = jwt.decode(
        token,
        key=key,
        algorithms=CLERK_ALGORITHMS,
        issuer=settings.CLERK_ISSUER or None,
        leeway=settings.CLERK_LEEWAY_SECONDS,
        options=options,
    )
    authorized_parties = [p for p in settings.CLERK_AUTHORIZED_PARTIES if p]
    if authorized_parties and claims.get("azp") not in authorized_parties:
        raise InvalidTokenError("Invalid authorized party.")
    return claims


def get_claim(claims: dict[str, t.Any], path: str) -> t.Any:
    """Read a dotted claim path, e.g. ``metadata.role``."""
    value: t.Any = claims
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def fetch_user_role(user_id: str) -> str | None:
    """Fetch the role stored in a user's public metadata from the Clerk backend API.

    Results are cached for ``CLERK_ROLE_CACHE_SECONDS``. Network errors are logged
    and treated as "no role".
    """
    cache_key = f"clerk:role:{user_id}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached or None

    try:
        response = httpx.get(
            f"{settings.CLERK_API_URL}/users/{user_id}",
            headers={"Authorization": f"Bearer {settings.CLERK_SECRET_KEY}"},
            timeout=10.0,
        )
        response.raise_for_status()
    except (httpx.HTTPStatusError, httpx.RequestError) as e:
        logger.warning("clerk_user_lookup_failed", user_id=user_id, error=str(e))
        return None

    role = (response.json().get("public_metadata") or {}).get("role")
    cache.set(cache_key, role or "", settings.CLERK_ROLE_CACHE_SECONDS)
    return t.cast(str | None, role)


def resolve_role(claims: dict[str, t.Any]) -> str | None:
    """Resolve the user's role from the token claims, falling back to the Clerk API."""
    role = get_claim(claims, settings.CLERK_ROLE_CLAIM)
    if role:
        return str(role)
    if settings.CLERK_SECRET_KEY:
        return fetch_user_role(claims["sub"])
    return None
