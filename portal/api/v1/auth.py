"""Registration and login for associates and supervisors."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from portal.core.database import get_db
from portal.core.exceptions import AuthenticationError, ConflictError, FormValidationError
from portal.schemas.auth import (
    BusinessTypesResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from portal.services.identity_store import authenticate_user, create_associate
from portal.services.validation import (
    BUSINESS_TYPES,
    validate_login_form,
    validate_register_form,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> RegisterResponse:
    """
    Register a new associate.

    400 lists every form problem at once; 409 means the email or CNPJ is
    already registered (or the insert failed for another reason).
    """
    validation = validate_register_form(body)
    if not validation.is_valid:
        raise FormValidationError(validation.errors)

    associate = create_associate(db, body)
    if associate is None:
        raise ConflictError("failed to create associate")

    return RegisterResponse(message="associate created successfully", user=associate)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """Check email and password; returns the user record (never the password)."""
    validation = validate_login_form(body)
    if not validation.is_valid:
        raise FormValidationError(validation.errors)

    user = authenticate_user(db, body.email, body.password)
    if user is None:
        raise AuthenticationError()

    logger.info("Login succeeded for %s user %s", user.role, user.user_id)
    return LoginResponse(message="login successful", user=user)


@router.get("/business-types", response_model=BusinessTypesResponse)
def list_business_types() -> BusinessTypesResponse:
    """Business categories offered on the registration form."""
    return BusinessTypesResponse(business_types=list(BUSINESS_TYPES))
