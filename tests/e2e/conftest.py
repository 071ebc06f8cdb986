import os

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

_REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def _normalize(url: str) -> str:
    # postgresql+psycopg2:// -> postgresql://
    if "+" in url.split("://", 1)[0]:
        scheme, rest = url.split("://", 1)
        url = scheme.split("+", 1)[0] + "://" + rest
    return url


@pytest.fixture(scope="session")
def pg_url():
    if os.getenv("SKIP_DOCKER_TESTS") == "1":
        pytest.skip("SKIP_DOCKER_TESTS=1")
    from testcontainers.postgres import PostgresContainer

    image = os.getenv("TEST_POSTGRES_IMAGE", "postgres:16-alpine")
    try:
        container = PostgresContainer(image)
        container.start()
    except Exception as exc:  # docker missing or daemon unreachable
        pytest.skip(f"PostgreSQL container unavailable: {exc}")
    try:
        yield _normalize(container.get_connection_url())
    finally:
        container.stop()


@pytest.fixture(scope="session")
def alembic_config():
    cfg = Config(os.path.join(_REPO_ROOT, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(_REPO_ROOT, "migrations"))
    return cfg


@pytest.fixture(scope="session")
def pg_engine(pg_url, alembic_config):
    previous = os.environ.get("TEST_DATABASE_URL")
    os.environ["TEST_DATABASE_URL"] = pg_url
    try:
        command.upgrade(alembic_config, "head")
    finally:
        if previous is None:
            os.environ.pop("TEST_DATABASE_URL", None)
        else:
            os.environ["TEST_DATABASE_URL"] = previous
    engine = create_engine(pg_url)
    yield engine
    engine.dispose()


@pytest.fixture
def pg_session(pg_engine):
    Session = sessionmaker(bind=pg_engine, autocommit=False, autoflush=False)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        with pg_engine.begin() as conn:
            conn.exec_driver_sql("TRUNCATE follows, stars, repositories, users CASCADE")
