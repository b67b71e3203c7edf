from .event import Event
from .organizer import Organizer

__all__ = [
    "Event",
    "Organizer",
]
