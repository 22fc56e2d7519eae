# package marker for airsoft_hub.models

# Import all models so they are registered on the metadata
from airsoft_hub.models.events import Event
from airsoft_hub.models.user import User
from airsoft_hub.models.event_saves import EventSave

__all__ = [
    "Event",
    "User",
    "EventSave",
]
