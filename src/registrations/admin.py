from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from registrations import models


class ParticipantInline(TabularInline):  # type: ignore[misc]
    model = models.Participant
    fields = ["first_name", "last_name", "email", "role", "waiver"]
    extra = 0


@admin.register(models.Reservation)
class ReservationAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = [
        "id",
        "event",
        "registration_type",
        "total_participants",
        "registration_fee",
        "payment_status",
        "payment_date",
    ]
    list_filter = ["registration_type", "payment_status"]
    search_fields = ["id", "event__title", "participants__email"]
    readonly_fields = ["id", "created_at", "updated_at"]
    list_select_related = ["event"]
    inlines = [ParticipantInline]


@admin.register(models.Participant)
class ParticipantAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["email", "first_name", "last_name", "event", "reservation", "role"]
    search_fields = ["email", "first_name", "last_name"]
    list_filter = ["waiver", "newsletter"]
    list_select_related = ["event", "reservation"]
    readonly_fields = ["id", "event", "reservation", "created_at", "updated_at"]
