"""
Permission checks for repository access control.

Both helpers are pure functions of (resource, current_user):
- can_read(repository, current_user): public, or private and owned by caller
- can_write(repository, current_user): caller owns the repository
"""
from typing import Optional, Dict, Any


def is_owner(resource, current_user: Optional[Dict[str, Any]]) -> bool:
    if resource is None or not current_user:
        return False
    uid = current_user.get("id")
    return uid is not None and getattr(resource, "owner_id", None) == uid


def can_read(resource, current_user: Optional[Dict[str, Any]]) -> bool:
    """Public repositories are readable by anyone; private ones only by their owner."""
    if resource is None:
        return False
    if not getattr(resource, "is_private", False):
        return True
    return is_owner(resource, current_user)


def can_write(resource, current_user: Optional[Dict[str, Any]]) -> bool:
    """Only the owner may modify or delete a repository."""
    return is_owner(resource, current_user)
