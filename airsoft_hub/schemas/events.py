from pydantic import BaseModel, Field, AliasChoices
from typing import Optional


class EventBase(BaseModel):
    """Base schema for event data. camelCase keys sent by the web client are accepted too."""
    name: Optional[str] = Field(None, description="Event name (required, non-empty)")
    date: Optional[str] = Field(None, description="Event date, YYYY-MM-DD")
    description: Optional[str] = Field(None, description="Short description")
    detailed_description: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("detailed_description", "detailedDescription"),
        description="Long description shown only in the details view",
    )
    location: Optional[str] = Field(None, description="Human readable location")
    lat: Optional[float] = Field(None, description="Latitude")
    lng: Optional[float] = Field(None, description="Longitude")
    category: Optional[str] = Field(None, description="One of 24h, 12h, Skirmish (default Skirmish)")
    facebook_link: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("facebook_link", "facebookLink"),
        description="Link to the Facebook event",
    )
    thumbnail: Optional[str] = Field(None, description="Relative URL of an uploaded thumbnail")


class EventCreate(EventBase):
    """Schema for creating a new event from a JSON body"""

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Operation Nightfall",
                "date": "2025-07-12",
                "description": "Night game in the woods",
                "location": "Karlovac, Croatia",
                "lat": 45.487,
                "lng": 15.547,
                "category": "12h",
                "facebook_link": "https://www.facebook.com/events/792766179793560"
            }
        }


class EventUpdate(EventBase):
    """Schema for updating an event - only provided fields are replaced"""
    pass


class EventResponse(BaseModel):
    """Schema for event response"""
    id: int
    name: str
    date: Optional[str] = None
    description: Optional[str] = None
    detailed_description: Optional[str] = None
    creator_email: Optional[str] = None
    location: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    category: Optional[str] = None
    facebook_link: Optional[str] = None
    thumbnail: Optional[str] = None

    class Config:
        from_attributes = True


class SavedEventResponse(BaseModel):
    event_id: int
    saved: bool = True
