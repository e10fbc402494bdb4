"""Pydantic request/response schemas."""

from portal.schemas.auth import (
    BusinessTypesResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from portal.schemas.cep import AddressLookup
from portal.schemas.health import HealthResponse
from portal.schemas.users import (
    AssociateRecord,
    MessageResponse,
    SupervisorRecord,
    UserDeleteRequest,
    UserRecord,
    UsersListResponse,
    UserUpdateRequest,
)

__all__ = [
    "AddressLookup",
    "AssociateRecord",
    "BusinessTypesResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RegisterRequest",
    "RegisterResponse",
    "SupervisorRecord",
    "UserDeleteRequest",
    "UserRecord",
    "UsersListResponse",
    "UserUpdateRequest",
]
