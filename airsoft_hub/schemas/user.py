from pydantic import BaseModel, Field, AliasChoices
from typing import Optional
from datetime import datetime


class UserLogin(BaseModel):
    email: str = Field("", description="User email address")
    password: str = Field("", description="User password")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "user@example.com",
                "password": "myPassword123"
            }
        }


class UserRegister(UserLogin):
    username: str = Field("", description="Public username, unique case-insensitively")
    airsoft_club: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("airsoft_club", "airsoftClub"),
        description="Airsoft club (defaults to 'No Club/Freelancer')",
    )

    class Config:
        json_schema_extra = {
            "example": {
                "email": "user@example.com",
                "password": "myPassword123",
                "username": "ghost",
                "airsoftClub": "Wolves Zagreb"
            }
        }


class ProfileUpdate(BaseModel):
    username: str = Field("", description="New username")
    airsoft_club: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("airsoft_club", "airsoftClub"),
    )


class UserProfile(BaseModel):
    """Public profile fields; the password hash is never included"""
    id: int
    email: str
    username: Optional[str] = None
    airsoft_club: Optional[str] = None
    is_admin: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    token: str
    email: str
