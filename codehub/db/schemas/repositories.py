from datetime import datetime
from enum import Enum
from pydantic import Field, field_validator

from .base import CamelModel
from .users import OwnerSummary


class RepositorySort(str, Enum):
    """Sort keys accepted by the public repository listing."""
    stars = "stars"
    forks = "forks"
    name = "name"
    updated = "updated"


class RepositoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    language: str | None = None
    is_private: bool = False
    readme: str | None = None


class RepositoryUpdate(CamelModel):
    # name, counters, visibility and owner are immutable here
    description: str | None = Field(default=None, max_length=500)
    language: str | None = None
    readme: str | None = None

    @field_validator("description", "language", "readme")
    @classmethod
    def _reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value


class Repository(CamelModel):
    id: str
    name: str
    description: str | None = None
    owner_id: str
    language: str | None = None
    stars_count: int
    forks_count: int
    watchers_count: int
    is_private: bool
    readme: str | None = None
    created_at: datetime
    updated_at: datetime


class RepositorySummary(CamelModel):
    id: str
    name: str
    description: str | None = None
    language: str | None = None
    stars_count: int
    forks_count: int
    watchers_count: int
    created_at: datetime
    updated_at: datetime
    owner: OwnerSummary | None = None


class RepositoryDetail(RepositorySummary):
    is_private: bool
    readme: str | None = None
    is_starred: bool = False


class OwnedRepository(CamelModel):
    """Listing row for a single user's repositories; no owner block."""
    id: str
    name: str
    description: str | None = None
    language: str | None = None
    stars_count: int
    forks_count: int
    watchers_count: int
    is_private: bool
    created_at: datetime
    updated_at: datetime


class RepositoryPage(CamelModel):
    repositories: list[RepositorySummary]
    total: int
    limit: int
    offset: int


class OwnedRepositoryPage(CamelModel):
    repositories: list[OwnedRepository]
    total: int


class StarredRepositoryList(CamelModel):
    repositories: list[RepositorySummary]


class StarResult(CamelModel):
    success: bool = True
    stars_count: int
