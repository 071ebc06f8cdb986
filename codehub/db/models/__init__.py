"""
Domain-split SQLAlchemy models.

Exposes `Base`, `now_utc` and all ORM classes from one import path.
"""

from .base import Base, now_utc, new_id  # re-export

from .users import User
from .repositories import Repository
from .social import Star, Follow

__all__ = [
    # base
    "Base",
    "now_utc",
    "new_id",
    # entities
    "User",
    "Repository",
    # relations
    "Star",
    "Follow",
]
