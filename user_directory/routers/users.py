import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from user_directory.core.errors import InvalidRole, NotFound, UserDirectoryError, status_for
from user_directory.db.session import get_db
from user_directory.models.user import User
from user_directory.repositories.user_repo import UserRepo
from user_directory.schemas import user as desc
from user_directory.services.roles import role_from_db, role_to_db
from user_directory.services.updates import build_user_changes


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user_v1.UserV1")


def get_user_repo(db: Session = Depends(get_db)) -> UserRepo:
    return UserRepo(db)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands timestamps back without tzinfo; they are stored as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _user_to_wire(user: User) -> desc.User:
    return desc.User(
        id=user.id,
        info=desc.UserInfo(name=user.name, email=user.email, role=role_from_db(user.role)),
        created_at=_as_utc(user.created_at),
        updated_at=_as_utc(user.updated_at),
    )


def _rpc_error(exc: UserDirectoryError) -> HTTPException:
    return HTTPException(status_code=status_for(exc), detail=str(exc))


@router.post("/Create", response_model=desc.CreateResponse)
def create(payload: desc.CreateRequest, repo: UserRepo = Depends(get_user_repo)) -> desc.CreateResponse:
    try:
        stored_role = role_to_db(payload.info.role)
    except InvalidRole as exc:
        logger.warning("create user rejected: %s", exc)
        raise _rpc_error(exc)

    try:
        user_id = repo.insert(name=payload.info.name, email=payload.info.email, role=stored_role)
    except UserDirectoryError as exc:
        logger.error("failed to insert user: %s", exc)
        raise _rpc_error(exc)

    logger.info("user inserted user_id=%s", user_id)
    return desc.CreateResponse(id=user_id)


@router.post("/Get", response_model=desc.GetResponse)
def get(payload: desc.GetRequest, repo: UserRepo = Depends(get_user_repo)) -> desc.GetResponse:
    try:
        user = repo.find_by_id(payload.id)
    except NotFound as exc:
        logger.warning("user not found user_id=%s", payload.id)
        raise _rpc_error(exc)
    except UserDirectoryError as exc:
        logger.error("failed to get user user_id=%s: %s", payload.id, exc)
        raise _rpc_error(exc)

    logger.info("get user user_id=%s", payload.id)
    return desc.GetResponse(user=_user_to_wire(user))


@router.post("/Update", response_model=desc.Empty)
def update(payload: desc.UpdateRequest, repo: UserRepo = Depends(get_user_repo)) -> desc.Empty:
    changes = build_user_changes(payload.info)
    if changes is None:
        logger.info("no changes for user_id=%s, update skipped", payload.id)
        return desc.Empty()

    try:
        matched = repo.apply_update(payload.id, changes)
    except UserDirectoryError as exc:
        logger.error("failed to update user user_id=%s: %s", payload.id, exc)
        raise _rpc_error(exc)

    if matched == 0:
        logger.warning("update matched no user user_id=%s", payload.id)
    else:
        logger.info("user updated user_id=%s", payload.id)
    return desc.Empty()


@router.post("/Delete", response_model=desc.Empty)
def delete(payload: desc.DeleteRequest, repo: UserRepo = Depends(get_user_repo)) -> desc.Empty:
    try:
        repo.delete_by_id(payload.id)
    except UserDirectoryError as exc:
        logger.error("failed to delete user user_id=%s: %s", payload.id, exc)
        raise _rpc_error(exc)

    logger.info("user deleted user_id=%s", payload.id)
    return desc.Empty()
