from typing import List

from sqlalchemy.orm import Session

from airsoft_hub.models.events import Event
from airsoft_hub.models.event_saves import EventSave


def save_event(db: Session, user_id: int, event_id: int) -> None:
    """Bookmark an event. Saving an already saved event is a no-op."""
    existing = db.query(EventSave).filter(
        EventSave.user_id == user_id,
        EventSave.event_id == event_id,
    ).first()
    if existing:
        return
    db.add(EventSave(user_id=user_id, event_id=event_id))
    db.commit()


def unsave_event(db: Session, user_id: int, event_id: int) -> None:
    db.query(EventSave).filter(
        EventSave.user_id == user_id,
        EventSave.event_id == event_id,
    ).delete(synchronize_session=False)
    db.commit()


def get_saved_event_ids(db: Session, user_id: int) -> List[int]:
    rows = db.query(EventSave.event_id).filter(EventSave.user_id == user_id).order_by(EventSave.event_id).all()
    return [row.event_id for row in rows]


def get_saved_events(db: Session, user_id: int) -> List[Event]:
    return (
        db.query(Event)
        .join(EventSave, EventSave.event_id == Event.id)
        .filter(EventSave.user_id == user_id)
        .order_by(Event.date, Event.id)
        .all()
    )
