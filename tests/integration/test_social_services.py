import pytest

from codehub.api.auth import build_user_context
from codehub.db import models, schemas
from codehub.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from codehub.services import RepositoryService, UserService


def _ctx(user):
    return build_user_context(user)


def _stars(db, repo_id):
    db.expire_all()
    return db.query(models.Repository).filter(models.Repository.id == repo_id).one().stars_count


def test_unstar_clamps_counter_at_zero(db_session, user_factory, repository_factory):
    owner = user_factory("owner@example.com")
    fan = user_factory("fan@example.com")
    repo = repository_factory(owner, "drifted", stars_count=0)
    # A star row without a matching increment, as left by counter drift
    db_session.add(models.Star(user_id=fan.id, repository_id=repo.id))
    db_session.commit()

    count = RepositoryService(db_session).unstar(repo.id, _ctx(fan))
    assert count == 0
    assert _stars(db_session, repo.id) == 0
    assert db_session.query(models.Star).count() == 0


def test_star_twice_leaves_counter_unchanged(db_session, user_factory, repository_factory):
    owner = user_factory("owner@example.com")
    fan = user_factory("fan@example.com")
    repo = repository_factory(owner, "demo")
    service = RepositoryService(db_session)

    assert service.star(repo.id, _ctx(fan)) == 1
    with pytest.raises(ConflictError):
        service.star(repo.id, _ctx(fan))
    assert _stars(db_session, repo.id) == 1
    assert db_session.query(models.Star).count() == 1


def test_unstar_not_starred_leaves_counter_unchanged(db_session, user_factory, repository_factory):
    owner = user_factory("owner@example.com")
    fan = user_factory("fan@example.com")
    repo = repository_factory(owner, "demo", stars_count=4)
    with pytest.raises(ConflictError):
        RepositoryService(db_session).unstar(repo.id, _ctx(fan))
    assert _stars(db_session, repo.id) == 4


def test_delete_repository_cascades_to_stars(db_session, user_factory, repository_factory):
    owner = user_factory("owner@example.com")
    fan = user_factory("fan@example.com")
    repo = repository_factory(owner, "demo")
    service = RepositoryService(db_session)
    service.star(repo.id, _ctx(fan))

    service.delete_repository(repo.id, _ctx(owner))
    assert db_session.query(models.Repository).count() == 0
    assert db_session.query(models.Star).count() == 0


def test_deleting_user_cascades_everything(db_session, user_factory, repository_factory):
    owner = user_factory("owner@example.com")
    fan = user_factory("fan@example.com")
    repo = repository_factory(owner, "demo")
    RepositoryService(db_session).star(repo.id, _ctx(fan))
    UserService(db_session).follow(owner.id, _ctx(fan))

    db_session.delete(db_session.get(models.User, owner.id))
    db_session.commit()
    assert db_session.query(models.Repository).count() == 0
    assert db_session.query(models.Star).count() == 0
    assert db_session.query(models.Follow).count() == 0


def test_create_duplicate_maps_integrity_error(db_session, user_factory):
    owner = user_factory("owner@example.com")
    service = RepositoryService(db_session)
    service.create_repository(schemas.RepositoryCreate(name="demo"), _ctx(owner))
    with pytest.raises(ConflictError) as exc:
        service.create_repository(schemas.RepositoryCreate(name="demo"), _ctx(owner))
    assert exc.value.message == "Repository with this name already exists"
    # Session is usable again after the rollback
    service.create_repository(schemas.RepositoryCreate(name="demo-2"), _ctx(owner))
    assert db_session.query(models.Repository).count() == 2


def test_ownership_checks(db_session, user_factory, repository_factory):
    owner = user_factory("owner@example.com")
    other = user_factory("other@example.com")
    repo = repository_factory(owner, "demo")
    service = RepositoryService(db_session)
    with pytest.raises(ForbiddenError):
        service.update_repository(repo.id, schemas.RepositoryUpdate(description="x"), _ctx(other))
    with pytest.raises(ForbiddenError):
        service.delete_repository(repo.id, _ctx(other))
    with pytest.raises(NotFoundError):
        service.delete_repository("missing", _ctx(owner))


def test_private_get_is_not_found_for_guest(db_session, user_factory, repository_factory):
    owner = user_factory("owner@example.com")
    repo = repository_factory(owner, "secret", is_private=True)
    service = RepositoryService(db_session)
    with pytest.raises(NotFoundError):
        service.get_repository(repo.id, None)
    assert service.get_repository(repo.id, _ctx(owner)).is_private is True


def test_follow_rules(db_session, user_factory):
    alice = user_factory("alice@example.com")
    bob = user_factory("bob@example.com")
    service = UserService(db_session)

    with pytest.raises(BadRequestError):
        service.follow(alice.id, _ctx(alice))
    service.follow(bob.id, _ctx(alice))
    with pytest.raises(ConflictError):
        service.follow(bob.id, _ctx(alice))
    # Self-follow stays a bad request whatever else exists
    with pytest.raises(BadRequestError):
        service.follow(alice.id, _ctx(alice))
    with pytest.raises(NotFoundError):
        service.follow("nobody", _ctx(alice))

    profile = service.get_profile(bob.id, _ctx(alice))
    assert profile.followers_count == 1
    assert profile.is_following is True

    service.unfollow(bob.id, _ctx(alice))
    with pytest.raises(ConflictError):
        service.unfollow(bob.id, _ctx(alice))


def test_list_page_reports_total_matches(db_session, user_factory, repository_factory):
    owner = user_factory("owner@example.com")
    for i in range(5):
        repository_factory(owner, f"repo-{i}")
    repository_factory(owner, "private", is_private=True)
    page = RepositoryService(db_session).list_repositories(limit=2, offset=4)
    assert len(page.repositories) == 1
    assert page.total == 5
