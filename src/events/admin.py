from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from events import models


class EventInline(TabularInline):  # type: ignore[misc]
    model = models.Event
    fields = ["title", "date", "slug", "is_enabled", "is_featured"]
    readonly_fields = fields
    extra = 0
    show_change_link = True

    def has_add_permission(self, request, obj=None):  # type: ignore[no-untyped-def]
        return False


@admin.register(models.Organizer)
class OrganizerAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["name", "contact", "clerk_id", "created_at"]
    search_fields = ["name", "contact", "clerk_id"]
    readonly_fields = ["id", "created_at", "updated_at"]
    inlines = [EventInline]


@admin.register(models.Event)
class EventAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = [
        "title",
        "type",
        "date",
        "organizer",
        "current_participants",
        "max_participants",
        "is_featured",
        "is_enabled",
    ]
    list_filter = ["type", "difficulty", "is_featured", "is_enabled", "is_team_event"]
    list_editable = ["is_featured", "is_enabled"]
    search_fields = ["title", "slug", "location", "creator_id"]
    autocomplete_fields = ["organizer"]
    readonly_fields = ["id", "creator_id", "current_participants", "created_at", "updated_at"]
    date_hierarchy = "date"
