"""
User repository functions.

Upsert from upstream identity, profile reads/updates and the aggregate counts
shown on a profile.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from codehub.db import models, schemas


def get_user(db: Session, user_id: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email).first()


def create_user(db: Session, *, email: str, name: str) -> models.User:
    user = models.User(email=email, name=name)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_user(db: Session, user: models.User, payload: schemas.UserUpdate) -> models.User:
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(user, key, value)
    db.commit()
    db.refresh(user)
    return user


def count_followers(db: Session, user_id: str) -> int:
    return (
        db.query(func.count())
        .select_from(models.Follow)
        .filter(models.Follow.following_id == user_id)
        .scalar()
    )


def count_following(db: Session, user_id: str) -> int:
    return (
        db.query(func.count())
        .select_from(models.Follow)
        .filter(models.Follow.follower_id == user_id)
        .scalar()
    )


def count_public_repositories(db: Session, user_id: str) -> int:
    return (
        db.query(func.count(models.Repository.id))
        .filter(models.Repository.owner_id == user_id, models.Repository.is_private.is_(False))
        .scalar()
    )
