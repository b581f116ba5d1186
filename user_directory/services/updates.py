from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from user_directory.core.errors import InvalidRole
from user_directory.schemas.user import UpdateUserInfo
from user_directory.services.roles import StoredRole, role_to_db


UPDATABLE_COLUMNS = ("name", "email", "role", "updated_at")


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


@dataclass(frozen=True)
class UserChanges:
    """Column values to write for one partial update.

    Only the fields that were effectively provided are set; ``updated_at`` is
    always present.
    """

    updated_at: datetime
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[StoredRole] = None

    def assignments(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        if self.name is not None:
            values["name"] = self.name
        if self.email is not None:
            values["email"] = self.email
        if self.role is not None:
            values["role"] = self.role.value
        values["updated_at"] = self.updated_at
        return {column: values[column] for column in UPDATABLE_COLUMNS if column in values}


def build_user_changes(
    info: UpdateUserInfo, now: Callable[[], datetime] = _utcnow
) -> Optional[UserChanges]:
    """Turn an update request into column changes, or ``None`` for a no-op.

    An empty string never clears ``name`` or ``email``; it is treated as if the
    field had not been sent. A role that does not map to a stored role is
    ignored rather than rejected.
    """
    name = info.name or None
    email = info.email or None
    try:
        role: Optional[StoredRole] = role_to_db(info.role)
    except InvalidRole:
        role = None

    if name is None and email is None and role is None:
        return None
    return UserChanges(updated_at=now(), name=name, email=email, role=role)
