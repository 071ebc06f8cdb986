import pytest
from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError

from codehub.api.auth import build_user_context, get_or_create_user
from codehub.db import models, schemas
from codehub.errors import BadRequestError, ConflictError
from codehub.services import RepositoryService, UserService

pytestmark = pytest.mark.e2e


def test_migration_creates_tables_and_indexes(pg_engine):
    inspector = inspect(pg_engine)
    tables = set(inspector.get_table_names())
    assert {"users", "repositories", "stars", "follows", "alembic_version"} <= tables

    repo_indexes = {ix["name"] for ix in inspector.get_indexes("repositories")}
    assert {"idx_repositories_public_updated", "idx_repositories_owner_id"} <= repo_indexes
    assert "idx_stars_repository_id" in {ix["name"] for ix in inspector.get_indexes("stars")}
    assert "idx_follows_following_id" in {ix["name"] for ix in inspector.get_indexes("follows")}


def test_migration_downgrade_and_upgrade(pg_engine, alembic_config, monkeypatch):
    from alembic import command

    monkeypatch.setenv("TEST_DATABASE_URL", pg_engine.url.render_as_string(hide_password=False))
    command.downgrade(alembic_config, "base")
    assert "repositories" not in inspect(pg_engine).get_table_names()
    command.upgrade(alembic_config, "head")
    assert "repositories" in inspect(pg_engine).get_table_names()


def test_star_counter_matches_star_rows(pg_session):
    owner = get_or_create_user(pg_session, email="owner@example.com", name="owner")
    fans = [get_or_create_user(pg_session, email=f"fan{i}@example.com") for i in range(3)]
    service = RepositoryService(pg_session)
    repo = service.create_repository(schemas.RepositoryCreate(name="demo"), build_user_context(owner))

    for fan in fans:
        service.star(repo.id, build_user_context(fan))
    with pytest.raises(ConflictError):
        service.star(repo.id, build_user_context(fans[0]))
    service.unstar(repo.id, build_user_context(fans[1]))

    stored = pg_session.execute(
        text("SELECT stars_count FROM repositories WHERE id = :id"), {"id": repo.id}
    ).scalar_one()
    rows = pg_session.execute(
        text("SELECT count(*) FROM stars WHERE repository_id = :id"), {"id": repo.id}
    ).scalar_one()
    assert stored == rows == 2


def test_unique_owner_name_enforced_by_store(pg_session):
    owner = get_or_create_user(pg_session, email="owner@example.com")
    pg_session.add(models.Repository(owner_id=owner.id, name="demo"))
    pg_session.commit()
    pg_session.add(models.Repository(owner_id=owner.id, name="demo"))
    with pytest.raises(IntegrityError):
        pg_session.commit()
    pg_session.rollback()


def test_self_follow_blocked_by_check_constraint(pg_session):
    user = get_or_create_user(pg_session, email="solo@example.com")
    with pytest.raises(BadRequestError):
        UserService(pg_session).follow(user.id, build_user_context(user))
    pg_session.add(models.Follow(follower_id=user.id, following_id=user.id))
    with pytest.raises(IntegrityError):
        pg_session.commit()
    pg_session.rollback()


def test_negative_star_count_rejected(pg_session):
    owner = get_or_create_user(pg_session, email="owner@example.com")
    pg_session.add(models.Repository(owner_id=owner.id, name="demo"))
    pg_session.commit()
    with pytest.raises(IntegrityError):
        pg_session.execute(text("UPDATE repositories SET stars_count = -1"))
        pg_session.commit()
    pg_session.rollback()


def test_user_delete_cascades(pg_session):
    owner = get_or_create_user(pg_session, email="owner@example.com")
    fan = get_or_create_user(pg_session, email="fan@example.com")
    repo = RepositoryService(pg_session).create_repository(
        schemas.RepositoryCreate(name="demo"), build_user_context(owner)
    )
    RepositoryService(pg_session).star(repo.id, build_user_context(fan))
    UserService(pg_session).follow(owner.id, build_user_context(fan))

    pg_session.execute(text("DELETE FROM users WHERE id = :id"), {"id": owner.id})
    pg_session.commit()
    for table in ("repositories", "stars", "follows"):
        assert pg_session.execute(text(f"SELECT count(*) FROM {table}")).scalar_one() == 0
