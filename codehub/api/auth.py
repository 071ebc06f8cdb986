"""
Authentication helpers and identity resolution.

The service trusts identity headers forwarded by the upstream auth proxy
(oauth2-proxy style). This module normalizes them and upserts the user.
"""
import logging
from typing import Optional, Dict, Any, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from codehub.db import models
from codehub.db.repositories import users as user_repo

logger = logging.getLogger("codehub.auth")


def normalize_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    cleaned = email.strip().lower()
    return cleaned or None


def resolve_identity_from_headers(
    x_auth_request_user: Optional[str],
    x_auth_request_email: Optional[str],
    x_forwarded_user: Optional[str],
    x_forwarded_email: Optional[str],
) -> Tuple[Optional[str], Optional[str]]:
    name = x_auth_request_user or x_forwarded_user
    email = normalize_email(x_auth_request_email or x_forwarded_email)
    return name, email


def get_or_create_user(db: Session, email: str, name: Optional[str] = None) -> models.User:
    user = user_repo.get_user_by_email(db, email)
    if user:
        return user
    display = (name or "").strip() or email.split("@")[0]
    try:
        user = user_repo.create_user(db, email=email, name=display[:100])
    except IntegrityError:
        # A concurrent request inserted the same email first
        db.rollback()
        user = user_repo.get_user_by_email(db, email)
        if user is None:
            raise
        return user
    logger.info("user_created: id=%s", user.id)
    return user


def build_user_context(user: models.User) -> Dict[str, Any]:
    """The identity dict handed to services and permission checks."""
    return {"id": user.id, "email": user.email, "name": user.name}
