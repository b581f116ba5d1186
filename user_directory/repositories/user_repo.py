from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from user_directory.core.errors import NotFound, StorageError
from user_directory.models.user import User
from user_directory.services.roles import StoredRole
from user_directory.services.updates import UserChanges


class UserRepo:
    def __init__(self, session: Session):
        self.session = session

    def _fail(self, action: str, exc: SQLAlchemyError) -> StorageError:
        self.session.rollback()
        return StorageError(f"failed to {action}: {exc}")

    def insert(self, *, name: str, email: str, role: StoredRole) -> int:
        user = User(name=name, email=email, role=role.value)
        try:
            self.session.add(user)
            self.session.flush()
            user_id = user.id
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("insert user", exc) from exc
        return user_id

    def find_by_id(self, user_id: int) -> User:
        try:
            user: Optional[User] = self.session.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as exc:
            raise self._fail("get user", exc) from exc
        if user is None:
            raise NotFound(user_id)
        return user

    def apply_update(self, user_id: int, changes: Optional[UserChanges]) -> int:
        """Write ``changes`` to the row and return the number of matched rows.

        ``None`` means there is nothing to write; no statement is issued.
        """
        if changes is None:
            return 0
        try:
            matched = (
                self.session.query(User)
                .filter(User.id == user_id)
                .update(changes.assignments(), synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("update user", exc) from exc
        return matched

    def delete_by_id(self, user_id: int) -> None:
        # deleting a missing id is not an error
        try:
            self.session.query(User).filter(User.id == user_id).delete(synchronize_session=False)
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("delete user", exc) from exc
