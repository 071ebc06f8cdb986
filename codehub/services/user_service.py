"""
User/social service: profiles with aggregate counts, follow toggling and the
followers / following / starred listings.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from codehub.db import models, schemas
from codehub.db.repositories import follows as follow_store
from codehub.db.repositories import stars as star_store
from codehub.db.repositories import users as user_repo
from codehub.errors import BadRequestError, ConflictError, NotFoundError

logger = logging.getLogger("codehub.users")

CurrentUser = Optional[Dict[str, Any]]


class UserService:
    """Service class for user profile and follow operations."""

    def __init__(self, db: Session):
        self.db = db

    def _require_user(self, user_id: str) -> models.User:
        user = user_repo.get_user(self.db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def get_profile(self, user_id: str, current_user: CurrentUser) -> schemas.UserProfile:
        user = self._require_user(user_id)
        following = False
        if current_user and current_user.get("id") != user.id:
            following = follow_store.is_following(
                self.db, follower_id=current_user["id"], following_id=user.id
            )
        base = schemas.User.model_validate(user)
        return schemas.UserProfile(
            **base.model_dump(),
            followers_count=user_repo.count_followers(self.db, user.id),
            following_count=user_repo.count_following(self.db, user.id),
            repositories_count=user_repo.count_public_repositories(self.db, user.id),
            is_following=following,
        )

    def update_profile(self, user: models.User, payload: schemas.UserUpdate) -> models.User:
        """Only ever applied to the caller's own record."""
        updated = user_repo.update_user(self.db, user, payload)
        logger.info("profile_updated: id=%s fields=%s", updated.id, sorted(payload.model_fields_set))
        return updated

    def follow(self, target_id: str, current_user: Dict[str, Any]) -> None:
        follower_id = current_user["id"]
        if follower_id == target_id:
            raise BadRequestError("Cannot follow yourself")
        self._require_user(target_id)
        try:
            follow_store.add_follow(self.db, follower_id=follower_id, following_id=target_id)
        except IntegrityError:
            self.db.rollback()
            if user_repo.get_user(self.db, target_id) is None:
                raise NotFoundError("User not found")
            logger.info("follow_conflict: follower=%s following=%s", follower_id, target_id)
            raise ConflictError("Already following")
        logger.info("user_followed: follower=%s following=%s", follower_id, target_id)

    def unfollow(self, target_id: str, current_user: Dict[str, Any]) -> None:
        follower_id = current_user["id"]
        removed = follow_store.remove_follow(self.db, follower_id=follower_id, following_id=target_id)
        if not removed:
            raise ConflictError("Not following")
        logger.info("user_unfollowed: follower=%s following=%s", follower_id, target_id)

    def list_followers(self, user_id: str, *, limit: int = 20, offset: int = 0) -> schemas.UserList:
        rows = follow_store.list_followers(self.db, user_id, skip=offset, limit=limit)
        return schemas.UserList(users=[schemas.UserSummary.model_validate(u) for u in rows])

    def list_following(self, user_id: str, *, limit: int = 20, offset: int = 0) -> schemas.UserList:
        rows = follow_store.list_following(self.db, user_id, skip=offset, limit=limit)
        return schemas.UserList(users=[schemas.UserSummary.model_validate(u) for u in rows])

    def list_starred(self, user_id: str, *, limit: int = 20, offset: int = 0) -> schemas.StarredRepositoryList:
        rows = star_store.list_starred_public_repositories(self.db, user_id, skip=offset, limit=limit)
        return schemas.StarredRepositoryList(
            repositories=[schemas.RepositorySummary.model_validate(r) for r in rows]
        )
