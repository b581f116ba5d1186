from fastapi import status


class UserDirectoryError(Exception):
    """Base class for failures surfaced to RPC callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR


class InvalidRole(UserDirectoryError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, role: object) -> None:
        super().__init__(f"Invalid role: {role!r}")
        self.role = role


class NotFound(UserDirectoryError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class StorageError(UserDirectoryError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ProtocolError(UserDirectoryError):
    # request-shape validation, same status FastAPI uses for malformed bodies
    status_code = 422


def status_for(exc: UserDirectoryError) -> int:
    return exc.status_code
