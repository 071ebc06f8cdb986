from datetime import datetime
from pydantic import Field, field_validator

from .base import CamelModel


class UserSummary(CamelModel):
    id: str
    name: str
    image: str | None = None
    bio: str | None = None


class OwnerSummary(CamelModel):
    id: str
    name: str
    image: str | None = None


class User(CamelModel):
    id: str
    name: str
    email: str
    image: str | None = None
    bio: str | None = None
    location: str | None = None
    created_at: datetime


class UserProfile(User):
    followers_count: int = 0
    following_count: int = 0
    repositories_count: int = 0
    is_following: bool = False


class UserUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    bio: str | None = Field(default=None, max_length=500)
    location: str | None = Field(default=None, max_length=100)

    @field_validator("name", "bio", "location")
    @classmethod
    def _reject_null(cls, value):
        # Omit a field to leave it unchanged; null is not a value here
        if value is None:
            raise ValueError("must not be null")
        return value


class UserList(CamelModel):
    users: list[UserSummary]
