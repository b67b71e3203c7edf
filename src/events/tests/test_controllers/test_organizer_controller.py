import orjson
import pytest
from django.test.client import Client
from django.urls import reverse

from conftest import EventFactory
from events.models import Organizer

pytestmark = pytest.mark.django_db


class TestCreateOrganizer:
    def test_creates_profile(self, organizer_client: Client) -> None:
        payload = {"name": "Riviera Runners", "contact": "hi@example.com", "website": "riviera.example.com"}

        response = organizer_client.post(
            reverse("api:organizers"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Organizer created successfully"
        assert body["data"]["organizer"]["clerk_id"] == "user_organizer"
        assert body["data"]["organizer"]["website"] == "https://riviera.example.com"

    def test_existing_profile_is_returned(self, organizer_client: Client, organizer: Organizer) -> None:
        payload = {"name": "Different", "contact": "x@example.com"}

        response = organizer_client.post(
            reverse("api:organizers"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Organizer already exists"
        assert body["data"]["organizer"]["id"] == organizer.id
        assert body["data"]["organizer"]["name"] == "Riviera Runners"

    def test_validation_error(self, organizer_client: Client) -> None:
        response = organizer_client.post(
            reverse("api:organizers"), data=orjson.dumps({"contact": "x"}), content_type="application/json"
        )

        assert response.status_code == 422
        assert response.json()["error"] == {
            "message": "Name is required and must be a non-empty string",
            "code": "VALIDATION_ERROR",
        }

    def test_requires_role(self, member_client: Client) -> None:
        response = member_client.post(
            reverse("api:organizers"),
            data=orjson.dumps({"name": "n", "contact": "c"}),
            content_type="application/json",
        )

        assert response.status_code == 403


class TestGetOrganizer:
    def test_get_my_organizer(self, organizer_client: Client, organizer: Organizer) -> None:
        response = organizer_client.get(reverse("api:get_my_organizer"))

        assert response.status_code == 200
        assert response.json()["data"]["organizer"]["id"] == organizer.id

    def test_get_my_organizer_without_profile(self, organizer_client: Client) -> None:
        response = organizer_client.get(reverse("api:get_my_organizer"))

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Organizer with Clerk ID user_organizer not found"

    def test_get_by_id(self, other_organizer_client: Client, organizer: Organizer) -> None:
        response = other_organizer_client.get(reverse("api:organizer_detail", kwargs={"organizer_id": organizer.id}))

        assert response.status_code == 200
        assert response.json()["data"]["organizer"]["name"] == "Riviera Runners"


class TestUpdateOrganizer:
    def test_owner_updates(self, organizer_client: Client, organizer: Organizer) -> None:
        response = organizer_client.put(
            reverse("api:organizer_detail", kwargs={"organizer_id": organizer.id}),
            data=orjson.dumps({"description": "Running club"}),
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Organizer updated successfully"
        organizer.refresh_from_db()
        assert organizer.description == "Running club"

    def test_other_organizer_is_forbidden(self, other_organizer_client: Client, organizer: Organizer) -> None:
        response = other_organizer_client.put(
            reverse("api:organizer_detail", kwargs={"organizer_id": organizer.id}),
            data=orjson.dumps({"name": "Taken"}),
            content_type="application/json",
        )

        assert response.status_code == 403

    def test_empty_body(self, organizer_client: Client, organizer: Organizer) -> None:
        response = organizer_client.put(
            reverse("api:organizer_detail", kwargs={"organizer_id": organizer.id}),
            data=orjson.dumps({}),
            content_type="application/json",
        )

        assert response.status_code == 422
        assert response.json()["error"]["message"] == "At least one field must be provided for update"


class TestDeleteOrganizer:
    def test_owner_deletes(self, organizer_client: Client, organizer: Organizer) -> None:
        response = organizer_client.delete(reverse("api:organizer_detail", kwargs={"organizer_id": organizer.id}))

        assert response.status_code == 204
        assert not Organizer.objects.exists()

    def test_conflict_with_events(
        self, organizer_client: Client, organizer: Organizer, event_factory: EventFactory
    ) -> None:
        event_factory(title="Cancun Marathon")

        response = organizer_client.delete(reverse("api:organizer_detail", kwargs={"organizer_id": organizer.id}))

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "CONFLICT"
        assert error["details"]["event_count"] == 1
