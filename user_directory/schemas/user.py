from datetime import datetime
from enum import Enum
from typing import Annotated, Optional, Union

from pydantic import BaseModel, Field


class Role(str, Enum):
    UNSPECIFIED = "UNSPECIFIED"
    ADMIN = "ADMIN"
    USER = "USER"


# ids travel as int64
UserId = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]

# unknown role text is kept as a plain string so the role codec decides
WireRole = Annotated[Union[Role, str], Field(union_mode="left_to_right")]


class UserInfo(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=255)
    role: WireRole = Role.UNSPECIFIED


class User(BaseModel):
    id: UserId
    info: UserInfo
    created_at: datetime
    updated_at: Optional[datetime] = None


class UpdateUserInfo(BaseModel):
    # None means "not provided"; empty strings are treated the same way
    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    role: WireRole = Role.UNSPECIFIED


class CreateRequest(BaseModel):
    info: UserInfo


class CreateResponse(BaseModel):
    id: UserId


class GetRequest(BaseModel):
    id: UserId


class GetResponse(BaseModel):
    user: User


class UpdateRequest(BaseModel):
    id: UserId
    info: UpdateUserInfo = Field(default_factory=UpdateUserInfo)


class DeleteRequest(BaseModel):
    id: UserId


class Empty(BaseModel):
    pass
