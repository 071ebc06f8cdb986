"""
Repositories API endpoints.

Public listing, visibility-gated detail, owner-only mutations and starring.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from codehub.db import schemas
from codehub.db.database import get_db
from codehub.api.deps import Pagination, get_current_user_context, get_optional_user_context, get_pagination
from codehub.services import RepositoryService

router = APIRouter(prefix="/repositories", tags=["repositories"])


@router.get("", response_model=schemas.RepositoryPage)
def list_repositories_endpoint(
    search: Optional[str] = None,
    language: Optional[str] = None,
    sort_by: schemas.RepositorySort = Query(default=schemas.RepositorySort.updated, alias="sortBy"),
    page: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    return RepositoryService(db).list_repositories(
        search=search,
        language=language,
        sort_by=sort_by,
        limit=page.limit,
        offset=page.offset,
    )


@router.post("", response_model=schemas.Repository, status_code=status.HTTP_201_CREATED)
def create_repository_endpoint(
    payload: schemas.RepositoryCreate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _user, current_user = user_context
    return RepositoryService(db).create_repository(payload, current_user)


@router.get("/user/{user_id}", response_model=schemas.OwnedRepositoryPage)
def list_user_repositories_endpoint(
    user_id: str,
    page: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    current_user=Depends(get_optional_user_context),
):
    return RepositoryService(db).list_user_repositories(
        user_id, current_user, limit=page.limit, offset=page.offset
    )


@router.get("/{repository_id}", response_model=schemas.RepositoryDetail)
def get_repository_endpoint(
    repository_id: str,
    db: Session = Depends(get_db),
    current_user=Depends(get_optional_user_context),
):
    return RepositoryService(db).get_repository(repository_id, current_user)


@router.patch("/{repository_id}", response_model=schemas.Repository)
def update_repository_endpoint(
    repository_id: str,
    payload: schemas.RepositoryUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _user, current_user = user_context
    return RepositoryService(db).update_repository(repository_id, payload, current_user)


@router.delete("/{repository_id}", response_model=schemas.ActionResult)
def delete_repository_endpoint(
    repository_id: str,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _user, current_user = user_context
    RepositoryService(db).delete_repository(repository_id, current_user)
    return schemas.ActionResult()


@router.post("/{repository_id}/star", response_model=schemas.StarResult)
def star_repository_endpoint(
    repository_id: str,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _user, current_user = user_context
    count = RepositoryService(db).star(repository_id, current_user)
    return schemas.StarResult(stars_count=count)


@router.delete("/{repository_id}/star", response_model=schemas.StarResult)
def unstar_repository_endpoint(
    repository_id: str,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _user, current_user = user_context
    count = RepositoryService(db).unstar(repository_id, current_user)
    return schemas.StarResult(stars_count=count)
