"""
Shared fixtures: Clerk session tokens, API clients, events and registrations.
"""

import typing as t
from datetime import timedelta
from decimal import Decimal

import faker
import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from django.core.cache import cache
from django.test.client import Client
from django.utils import timezone

from common.authentication import ROLE_ADMIN, ROLE_ORGANIZER, ClerkUser
from eventhub.celery import app as celery_app
from events.models import Event, Organizer
from registrations import schema as registration_schema
from registrations.service import registration_service
from registrations.service.registration_service import RegistrationResult

fake = faker.Faker()


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_public_pem(rsa_private_key: rsa.RSAPrivateKey) -> str:
    return (
        rsa_private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )


@pytest.fixture(autouse=True)
def clerk_settings(settings: t.Any, rsa_public_pem: str) -> None:
    """Verify session tokens against the test key pair, without any network lookups."""
    settings.CLERK_JWT_KEY = rsa_public_pem
    settings.CLERK_JWKS_URL = ""
    settings.CLERK_ISSUER = ""
    settings.CLERK_AUTHORIZED_PARTIES = []
    settings.CLERK_SECRET_KEY = ""


@pytest.fixture(autouse=True)
def enable_celery_eager_mode(settings: t.Any) -> None:
    """Enable Celery eager mode for tests so tasks execute synchronously."""
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True
    celery_app.conf.update(task_always_eager=True, task_eager_propagates=True)


@pytest.fixture(autouse=True)
def email_settings(settings: t.Any) -> None:
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
    settings.NOTIFICATIONS_ENABLED = True
    settings.PAYMENT_BANK_ACCOUNT = "CLABE 012345678901234567"


@pytest.fixture(autouse=True)
def clear_cache() -> None:
    """Start every test with empty throttle history and role cache."""
    cache.clear()


TokenFactory = t.Callable[..., str]


@pytest.fixture
def token_factory(rsa_private_key: rsa.RSAPrivateKey) -> TokenFactory:
    """Mint Clerk-like session tokens signed with the test key."""

    def _make(
        user_id: str,
        role: str | None = None,
        email: str | None = None,
        expires_in: timedelta = timedelta(minutes=5),
        **claims: t.Any,
    ) -> str:
        now = timezone.now()
        payload: dict[str, t.Any] = {
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + expires_in).timestamp()),
            **claims,
        }
        if role is not None:
            payload["metadata"] = {"role": role}
        if email is not None:
            payload["email"] = email
        return jwt.encode(payload, rsa_private_key, algorithm="RS256")

    return _make


def client_for(token_factory: TokenFactory, user: ClerkUser) -> Client:
    token = token_factory(user.id, role=user.role, email=user.email)
    return Client(HTTP_AUTHORIZATION=f"Bearer {token}")


@pytest.fixture
def organizer_user() -> ClerkUser:
    return ClerkUser(id="user_organizer", email="organizer@example.com", role=ROLE_ORGANIZER)


@pytest.fixture
def other_organizer_user() -> ClerkUser:
    return ClerkUser(id="user_other_organizer", email="other@example.com", role=ROLE_ORGANIZER)


@pytest.fixture
def admin_clerk_user() -> ClerkUser:
    return ClerkUser(id="user_admin", email="admin@example.com", role=ROLE_ADMIN)


@pytest.fixture
def member_user() -> ClerkUser:
    """An authenticated user without any role."""
    return ClerkUser(id="user_member", email="member@example.com")


@pytest.fixture
def organizer_client(token_factory: TokenFactory, organizer_user: ClerkUser) -> Client:
    """API client for an organizer."""
    return client_for(token_factory, organizer_user)


@pytest.fixture
def other_organizer_client(token_factory: TokenFactory, other_organizer_user: ClerkUser) -> Client:
    """API client for an organizer who owns nothing in the default fixtures."""
    return client_for(token_factory, other_organizer_user)


@pytest.fixture
def admin_api_client(token_factory: TokenFactory, admin_clerk_user: ClerkUser) -> Client:
    """API client for an admin."""
    return client_for(token_factory, admin_clerk_user)


@pytest.fixture
def member_client(token_factory: TokenFactory, member_user: ClerkUser) -> Client:
    """API client for an authenticated user without a role."""
    return client_for(token_factory, member_user)


@pytest.fixture
def organizer(organizer_user: ClerkUser) -> Organizer:
    return Organizer.objects.create(
        clerk_id=organizer_user.id,
        name="Riviera Runners",
        contact="hello@riviera.example.com",
        website="https://riviera.example.com",
    )


@pytest.fixture
def other_organizer(other_organizer_user: ClerkUser) -> Organizer:
    return Organizer.objects.create(clerk_id=other_organizer_user.id, name="Other Org", contact="other@example.com")


class EventFactory:
    """Factory for creating Event instances for testing."""

    def __init__(self, organizer: Organizer, creator_id: str) -> None:
        self.organizer = organizer
        self.creator_id = creator_id

    def create_event(self, **kwargs: t.Any) -> Event:
        title = kwargs.pop("title", fake.unique.sentence(nb_words=3).rstrip("."))
        defaults: dict[str, t.Any] = {
            "creator_id": self.creator_id,
            "organizer": self.organizer,
            "title": title,
            "type": "running",
            "date": timezone.now() + timedelta(days=30),
            "is_team_event": False,
            "required_participants": 1,
            "max_participants": 100,
            "location": fake.city(),
            "description": fake.paragraph(),
            "distance": "10K",
            "registration_fee": Decimal("50.00"),
            "registration_deadline": timezone.now() + timedelta(days=20),
            "image": "https://images.example.com/event.jpg",
            "difficulty": "beginner",
            "tags": ["outdoor"],
            "slug": fake.unique.slug(),
        }
        defaults.update(kwargs)
        return Event.objects.create(**defaults)

    def __call__(self, **kwargs: t.Any) -> Event:
        return self.create_event(**kwargs)


@pytest.fixture
def event_factory(organizer: Organizer, organizer_user: ClerkUser) -> EventFactory:
    return EventFactory(organizer, organizer_user.id)


@pytest.fixture
def event(event_factory: EventFactory) -> Event:
    """An individual event with plenty of room."""
    return event_factory(title="Cancun Marathon", slug="cancun-marathon")


@pytest.fixture
def team_event(event_factory: EventFactory) -> Event:
    """A relay for teams of three, with room for two teams."""
    return event_factory(
        title="Jungle Relay",
        slug="jungle-relay",
        type="relay",
        is_team_event=True,
        is_relay=True,
        required_participants=3,
        max_participants=6,
        registration_fee=Decimal("30.00"),
    )


@pytest.fixture
def individual_payload() -> dict[str, t.Any]:
    return {
        "email": "Ana.Lopez@Example.com",
        "first_name": "Ana",
        "last_name": "Lopez",
        "phone": "+52 998 000 0000",
        "emergency_name": "Luis Lopez",
        "emergency_email": "luis@example.com",
        "shirt_size": "M",
        "waiver": True,
        "newsletter": False,
    }


@pytest.fixture
def team_payload() -> dict[str, t.Any]:
    """A team of three with team-level waiver, newsletter and address."""
    return {
        "waiver": True,
        "newsletter": True,
        "address": "Av. Tulum 123",
        "city": "Cancun",
        "medical_conditions": "None",
        "participants": [
            {"email": "captain@example.com", "first_name": "Carla", "last_name": "Diaz", "role": "swimmer"},
            {"email": "second@example.com", "first_name": "Beto", "last_name": "Ruiz", "role": "cyclist"},
            {
                "email": "third@example.com",
                "first_name": "Dani",
                "last_name": "Soto",
                "role": "runner",
                "newsletter": False,
            },
        ],
    }


@pytest.fixture
def individual_registration(
    event: Event, individual_payload: dict[str, t.Any], django_capture_on_commit_callbacks: t.Any
) -> RegistrationResult:
    with django_capture_on_commit_callbacks(execute=True):
        return registration_service.create_registration(
            event.id, registration_schema.RegistrationCreateSchema(**individual_payload)
        )


@pytest.fixture
def team_registration(
    team_event: Event, team_payload: dict[str, t.Any], django_capture_on_commit_callbacks: t.Any
) -> RegistrationResult:
    with django_capture_on_commit_callbacks(execute=True):
        return registration_service.create_registration(
            team_event.id, registration_schema.RegistrationCreateSchema(**team_payload)
        )
