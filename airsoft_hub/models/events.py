from sqlalchemy import Column, Integer, String, Text, Float

from airsoft_hub.database import Base


class Event(Base):
    """
    Event model for the airsoft events directory.
    Coordinates are stored as given; creator_email is informational only.
    """
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(Text, nullable=False)
    date = Column(String(32), nullable=True, index=True)  # Stored as YYYY-MM-DD
    description = Column(Text, nullable=True)
    detailed_description = Column(Text, nullable=True)
    creator_email = Column(String(255), nullable=True)
    location = Column(Text, nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    category = Column(String(32), nullable=True, default="Skirmish")
    facebook_link = Column(Text, nullable=True)
    thumbnail = Column(Text, nullable=True)  # Relative URL under /uploads
