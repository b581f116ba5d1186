from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from user_directory.core.errors import NotFound, StorageError
from user_directory.db.session import Base, create_db_engine, create_session_factory
from user_directory.models.user import User
from user_directory.repositories.user_repo import UserRepo
from user_directory.services.roles import StoredRole
from user_directory.services.updates import UserChanges


@pytest.fixture()
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'users.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(engine):
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


def test_insert_and_find_by_id(db):
    repo = UserRepo(db)
    user_id = repo.insert(name="Alice", email="a@x.com", role=StoredRole.ADMIN)

    user = repo.find_by_id(user_id)
    assert user.id == user_id
    assert (user.name, user.email, user.role) == ("Alice", "a@x.com", "ADMIN")
    assert user.created_at is not None
    assert user.updated_at is None


def test_find_by_id_missing_raises_not_found(db):
    with pytest.raises(NotFound) as ei:
        UserRepo(db).find_by_id(4242)
    assert ei.value.user_id == 4242


def test_apply_update_noop_issues_no_statement(db):
    repo = UserRepo(db)
    user_id = repo.insert(name="Alice", email="a@x.com", role=StoredRole.USER)

    assert repo.apply_update(user_id, None) == 0
    assert repo.find_by_id(user_id).updated_at is None


def test_apply_update_writes_only_given_columns(db):
    repo = UserRepo(db)
    user_id = repo.insert(name="Alice", email="a@x.com", role=StoredRole.USER)
    stamp = datetime.now(tz=timezone.utc)

    matched = repo.apply_update(user_id, UserChanges(updated_at=stamp, email="b@x.com"))
    assert matched == 1

    user = repo.find_by_id(user_id)
    assert user.name == "Alice"
    assert user.email == "b@x.com"
    assert user.role == "USER"
    assert user.updated_at.replace(tzinfo=timezone.utc) == stamp


def test_apply_update_unknown_id_matches_nothing(db):
    stamp = datetime.now(tz=timezone.utc)
    assert UserRepo(db).apply_update(999, UserChanges(updated_at=stamp, name="Ghost")) == 0


def test_delete_is_idempotent(db):
    repo = UserRepo(db)
    user_id = repo.insert(name="Alice", email="a@x.com", role=StoredRole.ADMIN)

    repo.delete_by_id(user_id)
    with pytest.raises(NotFound):
        repo.find_by_id(user_id)
    # second delete and a never-existing id are both fine
    repo.delete_by_id(user_id)
    repo.delete_by_id(123456)


def test_ids_are_not_reused_after_delete(db):
    repo = UserRepo(db)
    first = repo.insert(name="Alice", email="a@x.com", role=StoredRole.ADMIN)
    repo.delete_by_id(first)
    second = repo.insert(name="Bob", email="b@x.com", role=StoredRole.USER)
    assert second > first


def test_email_is_not_unique(db):
    repo = UserRepo(db)
    first = repo.insert(name="Alice", email="same@x.com", role=StoredRole.ADMIN)
    second = repo.insert(name="Alicia", email="same@x.com", role=StoredRole.USER)
    assert first != second


def test_role_constraint_rejects_unknown_text(db):
    db.add(User(name="Mallory", email="m@x.com", role="ROOT"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
    assert db.query(User).count() == 0


def test_driver_failures_become_storage_errors(engine, db):
    repo = UserRepo(db)
    user_id = repo.insert(name="Alice", email="a@x.com", role=StoredRole.ADMIN)
    Base.metadata.drop_all(bind=engine)

    with pytest.raises(StorageError):
        repo.insert(name="Bob", email="b@x.com", role=StoredRole.USER)
    with pytest.raises(StorageError):
        repo.find_by_id(user_id)
    with pytest.raises(StorageError):
        repo.apply_update(user_id, UserChanges(updated_at=datetime.now(tz=timezone.utc), name="Bob"))
    with pytest.raises(StorageError):
        repo.delete_by_id(user_id)
