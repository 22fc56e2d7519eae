"""
Data access for events.

Every function takes the request's Session as its first argument and
commits its own work. Callers roll back on failure.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from airsoft_hub.core import config
from airsoft_hub.models.events import Event
from airsoft_hub.models.event_saves import EventSave

logger = logging.getLogger(__name__)

# Columns a client may write; id and creator_email are set by the server
EVENT_COLUMNS = (
    "name",
    "date",
    "description",
    "detailed_description",
    "location",
    "lat",
    "lng",
    "category",
    "facebook_link",
    "thumbnail",
)

SAMPLE_EVENTS = [
    {
        "name": "Event 1",
        "description": "Desc 1",
        "location": "Croatia",
        "lat": 45.0,
        "lng": 16.0,
        "date": "2024-07-01",
        "facebook_link": "https://www.facebook.com/events/792766179793560",
    },
    {
        "name": "Event 2",
        "description": "Desc 2",
        "location": "Croatia",
        "lat": 46.0,
        "lng": 17.0,
        "date": "2024-07-15",
        "facebook_link": "https://www.facebook.com/events/2075916069838446",
    },
]


def normalize_category(value: Optional[str]) -> str:
    """Return the canonical category name, Skirmish when blank. Raises ValueError if unknown."""
    raw = (value or "").strip()
    if not raw:
        return config.DEFAULT_EVENT_CATEGORY
    for category in config.EVENT_CATEGORIES:
        if raw.lower() == category.lower():
            return category
    raise ValueError(f"Invalid category '{raw}'. Allowed: {', '.join(config.EVENT_CATEGORIES)}")


def list_events(db: Session) -> List[Event]:
    return db.query(Event).order_by(Event.date, Event.id).all()


def get_event(db: Session, event_id: int) -> Optional[Event]:
    return db.query(Event).filter(Event.id == event_id).first()


def create_event(db: Session, fields: Dict[str, Any], creator_email: Optional[str] = None) -> Event:
    values = {key: fields.get(key) for key in EVENT_COLUMNS}
    values["category"] = values.get("category") or config.DEFAULT_EVENT_CATEGORY
    event = Event(creator_email=creator_email, **values)
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def update_event(db: Session, event_id: int, fields: Dict[str, Any]) -> Optional[Event]:
    """Replace only the given columns. Returns None when the event does not exist."""
    event = get_event(db, event_id)
    if event is None:
        return None
    for key, value in fields.items():
        if key in EVENT_COLUMNS:
            setattr(event, key, value)
    db.commit()
    db.refresh(event)
    return event


def delete_event(db: Session, event_id: int) -> bool:
    """Delete an event and its bookmarks. Returns whether a row was removed."""
    db.query(EventSave).filter(EventSave.event_id == event_id).delete(synchronize_session=False)
    deleted = db.query(Event).filter(Event.id == event_id).delete(synchronize_session=False)
    db.commit()
    return deleted > 0


def seed_events(db: Session) -> int:
    """Insert the sample events when the table is empty. Returns the number inserted."""
    if db.query(Event).count() > 0:
        return 0
    for sample in SAMPLE_EVENTS:
        db.add(Event(category=config.DEFAULT_EVENT_CATEGORY, **sample))
    db.commit()
    logger.info(f"Seeded {len(SAMPLE_EVENTS)} sample events")
    return len(SAMPLE_EVENTS)
