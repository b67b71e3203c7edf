import pytest

from common.authentication import ClerkUser
from common.exceptions import ConflictError, ForbiddenError, NotFoundError, UnprocessableError
from conftest import EventFactory
from events import schema
from events.models import Organizer
from events.service import organizer_service

pytestmark = pytest.mark.django_db


class TestSanitize:
    def test_collapses_whitespace_in_name(self) -> None:
        assert organizer_service.sanitize_name("  Riviera   Runners \n Club ") == "Riviera Runners Club"

    @pytest.mark.parametrize(
        "website,expected",
        [
            (None, None),
            ("", ""),
            ("   ", ""),
            ("example.com", "https://example.com"),
            ("http://example.com", "http://example.com"),
            (" https://example.com/path ", "https://example.com/path"),
            ("ftp://example.com", "ftp://example.com"),
        ],
    )
    def test_website(self, website: str | None, expected: str | None) -> None:
        assert organizer_service.sanitize_website(website) == expected

    def test_sanitize_organizer_data(self) -> None:
        data = organizer_service.sanitize_organizer_data(
            {"name": " A  B ", "contact": " c@example.com ", "website": "example.com", "description": " d "}
        )

        assert data == {
            "name": "A B",
            "contact": "c@example.com",
            "website": "https://example.com",
            "description": "d",
        }


class TestValidateCreateData:
    def test_accepts_minimal_data(self) -> None:
        organizer_service.validate_create_data({"name": "Org", "contact": "c@example.com"})

    @pytest.mark.parametrize(
        "data,message",
        [
            ({"contact": "c"}, "Name is required and must be a non-empty string"),
            ({"name": "", "contact": "c"}, "Name is required and must be a non-empty string"),
            ({"name": "n" * 256, "contact": "c"}, "Name must be 255 characters or less"),
            ({"name": "Org"}, "Contact is required and must be a non-empty string"),
            ({"name": "Org", "contact": "c" * 256}, "Contact must be 255 characters or less"),
            (
                {"name": "Org", "contact": "c", "website": "ftp://example.com"},
                "Website must be a valid URL starting with http:// or https://",
            ),
            (
                {"name": "Org", "contact": "c", "website": "https://" + "a" * 500},
                "Website must be 500 characters or less",
            ),
            ({"name": "Org", "contact": "c", "description": "d" * 1001}, "Description must be 1000 characters or less"),
        ],
    )
    def test_rejects_invalid_data(self, data: dict[str, str], message: str) -> None:
        with pytest.raises(UnprocessableError) as exc_info:
            organizer_service.validate_create_data(data)

        assert exc_info.value.message == message


class TestValidateUpdateData:
    def test_requires_at_least_one_field(self) -> None:
        with pytest.raises(UnprocessableError, match="At least one field must be provided for update"):
            organizer_service.validate_update_data({})

    def test_rejects_blank_name(self) -> None:
        with pytest.raises(UnprocessableError, match="Name must be a non-empty string"):
            organizer_service.validate_update_data({"name": ""})

    def test_allows_clearing_website(self) -> None:
        organizer_service.validate_update_data({"website": ""})


class TestCreateOrganizer:
    def test_creates_profile_for_user(self, organizer_user: ClerkUser) -> None:
        # Arrange
        payload = schema.OrganizerCreateSchema(name="  New   Org ", contact="hi@example.com", website="example.com")

        # Act
        organizer, created = organizer_service.create_organizer(payload, organizer_user)

        # Assert
        assert created is True
        assert organizer.clerk_id == organizer_user.id
        assert organizer.name == "New Org"
        assert organizer.website == "https://example.com"
        assert organizer.description == ""

    def test_is_idempotent(self, organizer: Organizer, organizer_user: ClerkUser) -> None:
        payload = schema.OrganizerCreateSchema(name="Another name", contact="other@example.com")

        result, created = organizer_service.create_organizer(payload, organizer_user)

        assert created is False
        assert result == organizer
        assert Organizer.objects.count() == 1
        result.refresh_from_db()
        assert result.name == "Riviera Runners"

    def test_validation_error(self, organizer_user: ClerkUser) -> None:
        with pytest.raises(UnprocessableError):
            organizer_service.create_organizer(schema.OrganizerCreateSchema(name="x"), organizer_user)

        assert not Organizer.objects.exists()


class TestQueries:
    def test_get_organizer_not_found(self) -> None:
        with pytest.raises(NotFoundError, match="Organizer with ID missing not found"):
            organizer_service.get_organizer("missing")

    def test_get_by_clerk_id(self, organizer: Organizer, organizer_user: ClerkUser) -> None:
        assert organizer_service.get_organizer_by_clerk_id(organizer_user.id) == organizer

    def test_get_by_clerk_id_not_found(self) -> None:
        with pytest.raises(NotFoundError, match="Organizer with Clerk ID nobody not found"):
            organizer_service.get_organizer_by_clerk_id("nobody")

    def test_other_users_organizer_is_hidden(self, organizer: Organizer, other_organizer_user: ClerkUser) -> None:
        with pytest.raises(NotFoundError):
            organizer_service.validate_organizer_exists(organizer.id, other_organizer_user)

    def test_admin_sees_any_organizer(self, organizer: Organizer, admin_clerk_user: ClerkUser) -> None:
        assert organizer_service.validate_organizer_exists(organizer.id, admin_clerk_user) == organizer


class TestUpdateOrganizer:
    def test_owner_updates_fields(self, organizer: Organizer, organizer_user: ClerkUser) -> None:
        payload = schema.OrganizerUpdateSchema(name="Renamed", description="  New description ")

        updated = organizer_service.update_organizer(organizer.id, payload, organizer_user)

        assert updated.name == "Renamed"
        assert updated.description == "New description"
        assert updated.contact == "hello@riviera.example.com"

    def test_empty_website_clears_it(self, organizer: Organizer, organizer_user: ClerkUser) -> None:
        updated = organizer_service.update_organizer(
            organizer.id, schema.OrganizerUpdateSchema(website=""), organizer_user
        )

        assert updated.website == ""

    def test_non_owner_is_forbidden(self, organizer: Organizer, other_organizer_user: ClerkUser) -> None:
        with pytest.raises(ForbiddenError, match="You can only modify organizers you created"):
            organizer_service.update_organizer(
                organizer.id, schema.OrganizerUpdateSchema(name="Hijacked"), other_organizer_user
            )

    def test_admin_may_update(self, organizer: Organizer, admin_clerk_user: ClerkUser) -> None:
        updated = organizer_service.update_organizer(
            organizer.id, schema.OrganizerUpdateSchema(contact="admin-set@example.com"), admin_clerk_user
        )

        assert updated.contact == "admin-set@example.com"


class TestDeleteOrganizer:
    def test_deletes_organizer_without_events(self, organizer: Organizer, organizer_user: ClerkUser) -> None:
        organizer_service.delete_organizer(organizer.id, organizer_user)

        assert not Organizer.objects.filter(pk=organizer.id).exists()

    def test_refuses_while_events_exist(
        self, organizer: Organizer, organizer_user: ClerkUser, event_factory: EventFactory
    ) -> None:
        # Arrange
        for title in ("One", "Two", "Three", "Four", "Five"):
            event_factory(title=title)

        # Act
        with pytest.raises(ConflictError) as exc_info:
            organizer_service.delete_organizer(organizer.id, organizer_user)

        # Assert
        assert exc_info.value.message == (
            "Cannot delete organizer. 5 event(s) are associated with this organizer: One, Two, Three and 2 more."
        )
        assert exc_info.value.details["event_count"] == 5
        assert Organizer.objects.filter(pk=organizer.id).exists()

    def test_lists_all_titles_when_few(
        self, organizer: Organizer, organizer_user: ClerkUser, event_factory: EventFactory
    ) -> None:
        event_factory(title="Only")

        with pytest.raises(ConflictError) as exc_info:
            organizer_service.delete_organizer(organizer.id, organizer_user)

        assert exc_info.value.message == "Cannot delete organizer. 1 event(s) are associated with this organizer: Only."

    def test_non_owner_is_forbidden(self, organizer: Organizer, other_organizer_user: ClerkUser) -> None:
        with pytest.raises(ForbiddenError):
            organizer_service.delete_organizer(organizer.id, other_organizer_user)
