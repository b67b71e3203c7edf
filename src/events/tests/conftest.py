import typing as t
from datetime import timedelta

import pytest
from django.utils import timezone


@pytest.fixture
def event_payload() -> dict[str, t.Any]:
    """A complete, valid body for creating an individual event."""
    return {
        "title": "Sunrise 10K",
        "type": "running",
        "date": (timezone.now() + timedelta(days=30)).isoformat(),
        "is_team_event": False,
        "required_participants": 1,
        "max_participants": 200,
        "location": "Playa del Carmen",
        "description": "A 10K along the beach at sunrise.",
        "distance": "10K",
        "registration_fee": "25.50",
        "registration_deadline": (timezone.now() + timedelta(days=20)).isoformat(),
        "image": "https://images.example.com/sunrise.jpg",
        "difficulty": "beginner",
        "tags": ["beach", "sunrise"],
    }
