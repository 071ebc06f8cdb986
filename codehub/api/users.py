"""
Users API endpoints.

Profiles, self-profile update, follow toggling and social listings.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from codehub.db import schemas
from codehub.db.database import get_db
from codehub.api.deps import Pagination, get_current_user_context, get_optional_user_context, get_pagination
from codehub.services import UserService

router = APIRouter(prefix="/users", tags=["users"])


# /me routes are declared before /{user_id} so they are matched first
@router.get("/me", response_model=schemas.UserProfile)
def get_me(
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return UserService(db).get_profile(user.id, current_user)


@router.patch("/me", response_model=schemas.User)
def update_me(
    payload: schemas.UserUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    user, _ctx = user_context
    return UserService(db).update_profile(user, payload)


@router.get("/{user_id}", response_model=schemas.UserProfile)
def get_user_profile(
    user_id: str,
    db: Session = Depends(get_db),
    current_user=Depends(get_optional_user_context),
):
    return UserService(db).get_profile(user_id, current_user)


@router.post("/{user_id}/follow", response_model=schemas.ActionResult)
def follow_user(
    user_id: str,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _user, current_user = user_context
    UserService(db).follow(user_id, current_user)
    return schemas.ActionResult()


@router.delete("/{user_id}/follow", response_model=schemas.ActionResult)
def unfollow_user(
    user_id: str,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _user, current_user = user_context
    UserService(db).unfollow(user_id, current_user)
    return schemas.ActionResult()


@router.get("/{user_id}/followers", response_model=schemas.UserList)
def list_followers(
    user_id: str,
    page: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    return UserService(db).list_followers(user_id, limit=page.limit, offset=page.offset)


@router.get("/{user_id}/following", response_model=schemas.UserList)
def list_following(
    user_id: str,
    page: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    return UserService(db).list_following(user_id, limit=page.limit, offset=page.offset)


@router.get("/{user_id}/starred", response_model=schemas.StarredRepositoryList)
def list_starred(
    user_id: str,
    page: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    return UserService(db).list_starred(user_id, limit=page.limit, offset=page.offset)
