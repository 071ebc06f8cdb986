"""
Code repository persistence.

Implements create/read/update/delete for repositories, the public listing
with search/sort/pagination, the per-owner listing and the relative counter
updates used by starring.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import case, func, or_
from sqlalchemy.orm import Session

from codehub.db import models, schemas

_SORT_COLUMNS = {
    schemas.RepositorySort.stars: models.Repository.stars_count.desc(),
    schemas.RepositorySort.forks: models.Repository.forks_count.desc(),
    schemas.RepositorySort.name: models.Repository.name.asc(),
    schemas.RepositorySort.updated: models.Repository.updated_at.desc(),
}


def default_readme(name: str, description: Optional[str]) -> str:
    return f"# {name}\n\n{description or ''}"


def create_repository(db: Session, *, owner_id: str, payload: schemas.RepositoryCreate) -> models.Repository:
    """Insert and commit. IntegrityError on a duplicate (owner, name) is left to the caller."""
    repo = models.Repository(
        name=payload.name,
        description=payload.description,
        language=payload.language,
        is_private=payload.is_private,
        readme=payload.readme or default_readme(payload.name, payload.description),
        owner_id=owner_id,
    )
    db.add(repo)
    db.commit()
    db.refresh(repo)
    return repo


def get_repository(db: Session, repository_id: str) -> Optional[models.Repository]:
    return db.query(models.Repository).filter(models.Repository.id == repository_id).first()


def update_repository(db: Session, repo: models.Repository, payload: schemas.RepositoryUpdate) -> models.Repository:
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(repo, key, value)
    db.commit()
    db.refresh(repo)
    return repo


def delete_repository(db: Session, repo: models.Repository) -> None:
    # stars go with it through ON DELETE CASCADE
    db.delete(repo)
    db.commit()


def _public_listing_query(db: Session, search: Optional[str], language: Optional[str]):
    q = db.query(models.Repository).filter(models.Repository.is_private.is_(False))
    if search:
        term = search.lower()
        q = q.filter(
            or_(
                func.lower(models.Repository.name).contains(term, autoescape=True),
                func.lower(models.Repository.description).contains(term, autoescape=True),
            )
        )
    if language:
        q = q.filter(models.Repository.language == language)
    return q


def list_public_repositories(
    db: Session,
    *,
    search: Optional[str] = None,
    language: Optional[str] = None,
    sort_by: schemas.RepositorySort = schemas.RepositorySort.updated,
    skip: int = 0,
    limit: int = 20,
) -> Tuple[List[models.Repository], int]:
    """Return one page of public repositories and the total number of matches."""
    q = _public_listing_query(db, search, language)
    total = q.order_by(None).count()
    rows = (
        q.order_by(_SORT_COLUMNS[sort_by], models.Repository.id.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return rows, total


def list_repositories_by_owner(
    db: Session,
    owner_id: str,
    *,
    include_private: bool,
    skip: int = 0,
    limit: int = 20,
) -> Tuple[List[models.Repository], int]:
    q = db.query(models.Repository).filter(models.Repository.owner_id == owner_id)
    if not include_private:
        q = q.filter(models.Repository.is_private.is_(False))
    total = q.count()
    rows = (
        q.order_by(models.Repository.updated_at.desc(), models.Repository.id.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return rows, total


def increment_stars(db: Session, repository_id: str) -> None:
    """Relative +1 on the counter; does not commit."""
    db.query(models.Repository).filter(models.Repository.id == repository_id).update(
        {
            models.Repository.stars_count: models.Repository.stars_count + 1,
            # Starring is not an owner modification
            models.Repository.updated_at: models.Repository.updated_at,
        },
        synchronize_session=False,
    )


def decrement_stars(db: Session, repository_id: str) -> None:
    """Relative -1 on the counter, floored at zero; does not commit."""
    db.query(models.Repository).filter(models.Repository.id == repository_id).update(
        {
            models.Repository.stars_count: case(
                (models.Repository.stars_count > 0, models.Repository.stars_count - 1),
                else_=0,
            ),
            models.Repository.updated_at: models.Repository.updated_at,
        },
        synchronize_session=False,
    )


def get_stars_count(db: Session, repository_id: str) -> int:
    count = (
        db.query(models.Repository.stars_count)
        .filter(models.Repository.id == repository_id)
        .scalar()
    )
    return count or 0
