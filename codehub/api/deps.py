"""
API dependency helpers.

Resolves the caller identity (required or optional) and pagination
parameters for routes.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Dict, Any

from fastapi import Depends, Header, HTTPException, Query, status
from sqlalchemy.orm import Session

from codehub.db import models
from codehub.db.database import get_db
from codehub.api.auth import build_user_context, get_or_create_user, resolve_identity_from_headers
from codehub.utils.settings import DEV_USER_EMAIL, DEV_USER_NAME, dev_mode_active

logger = logging.getLogger("codehub.auth")

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20
# Offsets are capped so the driver never sees an out-of-range integer
MAX_OFFSET = 2**31 - 1


def _resolve_user(
    db: Session,
    x_auth_request_user: Optional[str],
    x_auth_request_email: Optional[str],
    x_forwarded_user: Optional[str],
    x_forwarded_email: Optional[str],
) -> Optional[models.User]:
    try:
        is_dev_mode = dev_mode_active()
    except RuntimeError as exc:
        logger.error("DEV_MODE misconfiguration detected: %s", exc)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="DEV_MODE misconfigured")

    if is_dev_mode:
        return get_or_create_user(db, email=DEV_USER_EMAIL, name=DEV_USER_NAME)

    name, email = resolve_identity_from_headers(
        x_auth_request_user=x_auth_request_user,
        x_auth_request_email=x_auth_request_email,
        x_forwarded_user=x_forwarded_user,
        x_forwarded_email=x_forwarded_email,
    )
    if not email:
        return None
    return get_or_create_user(db, email=email, name=name)


# Contract:
# Returns (sqlalchemy User model, current_user_context_dict)
# Raises 401 if identity cannot be resolved.
def get_current_user_context(
    db: Session = Depends(get_db),
    x_auth_request_user: Optional[str] = Header(default=None),
    x_auth_request_email: Optional[str] = Header(default=None),
    x_forwarded_user: Optional[str] = Header(default=None),
    x_forwarded_email: Optional[str] = Header(default=None),
) -> Tuple[models.User, Dict[str, Any]]:
    user = _resolve_user(db, x_auth_request_user, x_auth_request_email, x_forwarded_user, x_forwarded_email)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return user, build_user_context(user)


def get_optional_user_context(
    db: Session = Depends(get_db),
    x_auth_request_user: Optional[str] = Header(default=None),
    x_auth_request_email: Optional[str] = Header(default=None),
    x_forwarded_user: Optional[str] = Header(default=None),
    x_forwarded_email: Optional[str] = Header(default=None),
) -> Optional[Dict[str, Any]]:
    """Caller identity for read paths; None for guests."""
    user = _resolve_user(db, x_auth_request_user, x_auth_request_email, x_forwarded_user, x_forwarded_email)
    if user is None:
        return None
    return build_user_context(user)


@dataclass(frozen=True)
class Pagination:
    limit: int
    offset: int


def get_pagination(
    limit: int = Query(default=DEFAULT_PAGE_SIZE),
    offset: int = Query(default=0),
) -> Pagination:
    # Out-of-range values are clamped rather than rejected
    return Pagination(limit=max(1, min(limit, MAX_PAGE_SIZE)), offset=max(0, min(offset, MAX_OFFSET)))
