"""
Repository service: listing, visibility-gated reads, owner-gated mutations
and star toggling for hosted code repositories.

Every method takes the caller identity explicitly (`current_user`, None for
guests) so visibility and ownership are decided from (identity, entity) only.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from codehub.api.permissions import can_read, can_write
from codehub.db import models, schemas
from codehub.db.repositories import repos as repo_store
from codehub.db.repositories import stars as star_store
from codehub.errors import ConflictError, ForbiddenError, NotFoundError

logger = logging.getLogger("codehub.repositories")

CurrentUser = Optional[Dict[str, Any]]

REPOSITORY_NOT_FOUND = "Repository not found"


def _summary(repo: models.Repository) -> schemas.RepositorySummary:
    return schemas.RepositorySummary.model_validate(repo)


class RepositoryService:
    """Service class for repository operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_repositories(
        self,
        *,
        search: Optional[str] = None,
        language: Optional[str] = None,
        sort_by: schemas.RepositorySort = schemas.RepositorySort.updated,
        limit: int = 20,
        offset: int = 0,
    ) -> schemas.RepositoryPage:
        """Public repositories only, regardless of who asks."""
        rows, total = repo_store.list_public_repositories(
            self.db, search=search, language=language, sort_by=sort_by, skip=offset, limit=limit
        )
        return schemas.RepositoryPage(
            repositories=[_summary(r) for r in rows],
            total=total,
            limit=limit,
            offset=offset,
        )

    def _get_readable(self, repository_id: str, current_user: CurrentUser) -> models.Repository:
        repo = repo_store.get_repository(self.db, repository_id)
        # Hidden private repositories look exactly like missing ones
        if repo is None or not can_read(repo, current_user):
            raise NotFoundError(REPOSITORY_NOT_FOUND)
        return repo

    def _get_writable(self, repository_id: str, current_user: CurrentUser) -> models.Repository:
        repo = repo_store.get_repository(self.db, repository_id)
        if repo is None:
            raise NotFoundError(REPOSITORY_NOT_FOUND)
        if not can_write(repo, current_user):
            raise ForbiddenError("Unauthorized")
        return repo

    def get_repository(self, repository_id: str, current_user: CurrentUser) -> schemas.RepositoryDetail:
        repo = self._get_readable(repository_id, current_user)
        starred = False
        if current_user:
            starred = star_store.is_starred(self.db, user_id=current_user["id"], repository_id=repo.id)
        detail = schemas.RepositoryDetail.model_validate(repo)
        return detail.model_copy(update={"is_starred": starred})

    def create_repository(self, payload: schemas.RepositoryCreate, current_user: Dict[str, Any]) -> models.Repository:
        try:
            repo = repo_store.create_repository(self.db, owner_id=current_user["id"], payload=payload)
        except IntegrityError:
            self.db.rollback()
            logger.info("repository_create_conflict: owner=%s name=%s", current_user["id"], payload.name)
            raise ConflictError("Repository with this name already exists")
        logger.info("repository_created: id=%s owner=%s private=%s", repo.id, repo.owner_id, repo.is_private)
        return repo

    def update_repository(
        self, repository_id: str, payload: schemas.RepositoryUpdate, current_user: Dict[str, Any]
    ) -> models.Repository:
        repo = self._get_writable(repository_id, current_user)
        updated = repo_store.update_repository(self.db, repo, payload)
        logger.info("repository_updated: id=%s fields=%s", updated.id, sorted(payload.model_fields_set))
        return updated

    def delete_repository(self, repository_id: str, current_user: Dict[str, Any]) -> None:
        repo = self._get_writable(repository_id, current_user)
        repo_store.delete_repository(self.db, repo)
        logger.info("repository_deleted: id=%s owner=%s", repository_id, current_user["id"])

    def star(self, repository_id: str, current_user: Dict[str, Any]) -> int:
        """Star a repository; returns the new star count."""
        repo = self._get_readable(repository_id, current_user)
        user_id = current_user["id"]
        try:
            star_store.add_star(self.db, user_id=user_id, repository_id=repo.id)
            repo_store.increment_stars(self.db, repo.id)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            if repo_store.get_repository(self.db, repository_id) is None:
                raise NotFoundError(REPOSITORY_NOT_FOUND)
            logger.info("star_conflict: user=%s repository=%s", user_id, repository_id)
            raise ConflictError("Already starred")
        logger.info("repository_starred: user=%s repository=%s", user_id, repository_id)
        return repo_store.get_stars_count(self.db, repository_id)

    def unstar(self, repository_id: str, current_user: Dict[str, Any]) -> int:
        """Remove the caller's star; returns the new star count."""
        user_id = current_user["id"]
        removed = star_store.remove_star(self.db, user_id=user_id, repository_id=repository_id)
        if not removed:
            self.db.rollback()
            raise ConflictError("Not starred")
        repo_store.decrement_stars(self.db, repository_id)
        self.db.commit()
        logger.info("repository_unstarred: user=%s repository=%s", user_id, repository_id)
        return repo_store.get_stars_count(self.db, repository_id)

    def list_user_repositories(
        self, user_id: str, current_user: CurrentUser, *, limit: int = 20, offset: int = 0
    ) -> schemas.OwnedRepositoryPage:
        include_private = bool(current_user) and current_user.get("id") == user_id
        rows, total = repo_store.list_repositories_by_owner(
            self.db, user_id, include_private=include_private, skip=offset, limit=limit
        )
        return schemas.OwnedRepositoryPage(
            repositories=[schemas.OwnedRepository.model_validate(r) for r in rows],
            total=total,
        )
