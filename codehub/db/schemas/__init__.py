"""
Domain-split Pydantic schemas re-exported from one import path.
"""

# Import order: define base/simple types first to satisfy forward refs
from .base import CamelModel, ActionResult
from .users import User, UserSummary, OwnerSummary, UserProfile, UserUpdate, UserList
from .repositories import (
    RepositorySort,
    RepositoryCreate,
    RepositoryUpdate,
    Repository,
    RepositorySummary,
    RepositoryDetail,
    OwnedRepository,
    RepositoryPage,
    OwnedRepositoryPage,
    StarredRepositoryList,
    StarResult,
)

__all__ = [
    "CamelModel",
    "ActionResult",
    # users
    "User",
    "UserSummary",
    "OwnerSummary",
    "UserProfile",
    "UserUpdate",
    "UserList",
    # repositories
    "RepositorySort",
    "RepositoryCreate",
    "RepositoryUpdate",
    "Repository",
    "RepositorySummary",
    "RepositoryDetail",
    "OwnedRepository",
    "RepositoryPage",
    "OwnedRepositoryPage",
    "StarredRepositoryList",
    "StarResult",
]
