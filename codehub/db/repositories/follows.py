"""
Follow relation persistence and follower/following listings.
"""
from __future__ import annotations

from typing import List

from sqlalchemy import insert
from sqlalchemy.orm import Session

from codehub.db import models
from codehub.db.models import now_utc


def add_follow(db: Session, *, follower_id: str, following_id: str) -> None:
    """Insert and commit. A duplicate pair raises IntegrityError from the primary key."""
    db.execute(
        insert(models.Follow).values(follower_id=follower_id, following_id=following_id, created_at=now_utc())
    )
    db.commit()


def remove_follow(db: Session, *, follower_id: str, following_id: str) -> int:
    removed = (
        db.query(models.Follow)
        .filter(models.Follow.follower_id == follower_id, models.Follow.following_id == following_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return removed


def is_following(db: Session, *, follower_id: str, following_id: str) -> bool:
    return (
        db.query(models.Follow)
        .filter(models.Follow.follower_id == follower_id, models.Follow.following_id == following_id)
        .first()
        is not None
    )


def list_followers(db: Session, user_id: str, *, skip: int = 0, limit: int = 20) -> List[models.User]:
    return (
        db.query(models.User)
        .join(models.Follow, models.Follow.follower_id == models.User.id)
        .filter(models.Follow.following_id == user_id)
        .order_by(models.Follow.created_at.desc(), models.User.id.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def list_following(db: Session, user_id: str, *, skip: int = 0, limit: int = 20) -> List[models.User]:
    return (
        db.query(models.User)
        .join(models.Follow, models.Follow.following_id == models.User.id)
        .filter(models.Follow.follower_id == user_id)
        .order_by(models.Follow.created_at.desc(), models.User.id.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )
