import os
import pytest

# Force the in-memory sqlite engine before any codehub module builds it
os.environ["PYTEST_RUNNING"] = "1"
for _var in ("CODEHUB_TEST_DB", "TEST_DATABASE_URL"):
    os.environ.pop(_var, None)

from fastapi.testclient import TestClient

from codehub.db import models
from codehub.db.database import engine, SessionLocal
from codehub.api.main import app

models.Base.metadata.create_all(bind=engine)


@pytest.fixture(autouse=True)
def _no_dev_mode(monkeypatch):
    monkeypatch.delenv("DEV_MODE", raising=False)
    monkeypatch.delenv("ALLOW_DEV_MODE", raising=False)
    yield


@pytest.fixture(autouse=True)
def _clean_tables():
    yield
    with engine.begin() as conn:
        for table in reversed(models.Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def user_factory(db_session):
    def _create(email: str, name: str = None, **fields):
        user = models.User(email=email, name=name or email.split("@")[0], **fields)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _create


@pytest.fixture
def repository_factory(db_session):
    def _create(owner, name: str, **fields):
        repo = models.Repository(owner_id=owner.id, name=name, **fields)
        db_session.add(repo)
        db_session.commit()
        db_session.refresh(repo)
        return repo
    return _create
