"""User records returned by the identity store and the admin roster endpoints."""

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AssociateRecord(CamelModel):
    """Associate as returned to callers. password is always the empty string."""

    id: str = Field(..., description="Associate row id")
    user_id: str = Field(..., description="Owning base-user id")
    email: str
    name: str
    password: Literal[""] = ""
    role: Literal["ASSOCIATE"] = "ASSOCIATE"
    cep: str
    address: str
    number: str | None = None
    neighborhood: str
    city: str
    state: str
    phone: str
    cnpj: str
    business_types: list[str]
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class SupervisorRecord(CamelModel):
    """Supervisor (administrator) as returned to callers. password is always the empty string."""

    id: str = Field(..., description="Supervisor row id")
    user_id: str = Field(..., description="Owning base-user id")
    email: str
    name: str
    password: Literal[""] = ""
    role: Literal["SUPERVISOR"] = "SUPERVISOR"
    permissions: list[str]
    created_at: datetime
    updated_at: datetime


UserRecord = Annotated[Union[AssociateRecord, SupervisorRecord], Field(discriminator="role")]


class UsersListResponse(BaseModel):
    """Response for GET /users."""

    users: list[UserRecord]


class UserUpdateRequest(CamelModel):
    """Partial update of a user; only the provided fields are written."""

    user_id: str = Field(default="", description="Associate, supervisor or base-user id")
    name: str | None = None
    email: str | None = None
    role: str | None = None
    is_active: bool | None = None


class UserDeleteRequest(CamelModel):
    """Body for POST /users/delete."""

    user_id: str = Field(default="", description="Associate, supervisor or base-user id")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
