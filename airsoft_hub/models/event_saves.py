from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.sql import func

from airsoft_hub.database import Base


class EventSave(Base):
    """A user's bookmark of an event. The (user_id, event_id) pair is the key."""
    __tablename__ = "event_saves"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
