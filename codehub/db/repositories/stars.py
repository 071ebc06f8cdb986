"""
Star relation persistence.

Inserts and deletes never commit on their own: the caller pairs them with
the counter update and commits both together.
"""
from __future__ import annotations

from typing import List

from sqlalchemy import insert
from sqlalchemy.orm import Session

from codehub.db import models
from codehub.db.models import now_utc


def add_star(db: Session, *, user_id: str, repository_id: str) -> None:
    """Insert the star row; a duplicate surfaces as IntegrityError here."""
    db.execute(insert(models.Star).values(user_id=user_id, repository_id=repository_id, created_at=now_utc()))


def remove_star(db: Session, *, user_id: str, repository_id: str) -> int:
    """Delete the star row; returns the number of rows removed (0 or 1)."""
    return (
        db.query(models.Star)
        .filter(models.Star.user_id == user_id, models.Star.repository_id == repository_id)
        .delete(synchronize_session=False)
    )


def is_starred(db: Session, *, user_id: str, repository_id: str) -> bool:
    return (
        db.query(models.Star)
        .filter(models.Star.user_id == user_id, models.Star.repository_id == repository_id)
        .first()
        is not None
    )


def list_starred_public_repositories(
    db: Session, user_id: str, *, skip: int = 0, limit: int = 20
) -> List[models.Repository]:
    return (
        db.query(models.Repository)
        .join(models.Star, models.Star.repository_id == models.Repository.id)
        .filter(models.Star.user_id == user_id, models.Repository.is_private.is_(False))
        .order_by(models.Star.created_at.desc(), models.Repository.id.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )
