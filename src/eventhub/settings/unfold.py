"""Django Unfold admin configuration."""

from django.urls import reverse_lazy
from django.utils.translation import gettext_lazy as _

from .base import SITE_NAME, VERSION

UNFOLD = {
    "SITE_TITLE": f"{SITE_NAME} v{VERSION} Admin",
    "SITE_HEADER": f"{SITE_NAME} v{VERSION} Administration",
    "SITE_URL": "/",
    "SHOW_VIEW_ON_SITE": False,
    "SIDEBAR": {
        "show_search": True,
        "show_all_applications": False,
        "navigation": [
            {
                "title": _("Events"),
                "separator": True,
                "items": [
                    {
                        "title": _("Organizers"),
                        "icon": "apartment",
                        "link": reverse_lazy("admin:events_organizer_changelist"),
                    },
                    {
                        "title": _("Events"),
                        "icon": "event",
                        "link": reverse_lazy("admin:events_event_changelist"),
                    },
                ],
            },
            {
                "title": _("Registrations"),
                "separator": True,
                "items": [
                    {
                        "title": _("Reservations"),
                        "icon": "confirmation_number",
                        "link": reverse_lazy("admin:registrations_reservation_changelist"),
                    },
                    {
                        "title": _("Participants"),
                        "icon": "group",
                        "link": reverse_lazy("admin:registrations_participant_changelist"),
                    },
                ],
            },
        ],
    },
}
