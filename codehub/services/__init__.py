"""Business logic services package."""

from .repository_service import RepositoryService
from .user_service import UserService

__all__ = [
    "RepositoryService",
    "UserService",
]
