from enum import Enum
from typing import Optional

from user_directory.core.errors import InvalidRole
from user_directory.schemas.user import Role


class StoredRole(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


_TO_DB = {
    Role.ADMIN: StoredRole.ADMIN,
    Role.USER: StoredRole.USER,
}

_FROM_DB = {
    StoredRole.ADMIN.value: Role.ADMIN,
    StoredRole.USER.value: Role.USER,
}


def role_to_db(role: object) -> StoredRole:
    """Map a wire role to its stored form.

    Raises :class:`InvalidRole` for ``UNSPECIFIED`` and anything that is not a
    wire role, so an ambiguous role never reaches the table.
    """
    try:
        wire_role = Role(role)
    except ValueError:
        raise InvalidRole(role) from None
    if wire_role not in _TO_DB:
        raise InvalidRole(role)
    return _TO_DB[wire_role]


def role_from_db(stored: Optional[str]) -> Role:
    """Map stored role text back to the wire role; unknown text is UNSPECIFIED."""
    if not isinstance(stored, str):
        return Role.UNSPECIFIED
    return _FROM_DB.get(stored, Role.UNSPECIFIED)
