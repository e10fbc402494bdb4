"""Roster management: list, update and delete users."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from portal.core.database import get_db
from portal.core.exceptions import ConflictError, FormValidationError
from portal.schemas.users import (
    MessageResponse,
    UserDeleteRequest,
    UsersListResponse,
    UserUpdateRequest,
)
from portal.services.identity_store import delete_user, get_all_users, update_user
from portal.services.validation import validate_user_update

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(db: Annotated[Session, Depends(get_db)]) -> UsersListResponse:
    """All associates and supervisors, newest first."""
    return UsersListResponse(users=get_all_users(db))


@router.post("/update", response_model=MessageResponse)
def post_update_user(
    body: UserUpdateRequest,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """
    Partially update a user. userId may be an associate id, a supervisor id
    or a base-user id; only the fields present in the body are written.
    """
    validation = validate_user_update(body)
    if not validation.is_valid:
        raise FormValidationError(validation.errors)

    updated = update_user(
        db,
        body.user_id,
        name=body.name,
        email=body.email,
        role=body.role,
        is_active=body.is_active,
    )
    if not updated:
        raise ConflictError("failed to update user")
    return MessageResponse(message="user updated successfully")


@router.post("/delete", response_model=MessageResponse)
def post_delete_user(
    body: UserDeleteRequest,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a user together with its associate/supervisor row."""
    if not body.user_id:
        raise FormValidationError(["Usuário é obrigatório"])

    if not delete_user(db, body.user_id):
        raise ConflictError("failed to delete user")
    return MessageResponse(message="user deleted successfully")
