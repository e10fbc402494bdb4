"""Request/response schemas for the registration and login endpoints."""

from pydantic import Field

from portal.schemas.users import AssociateRecord, CamelModel, UserRecord


class RegisterRequest(CamelModel):
    """
    Registration form as posted by the client.

    Fields default to empty so that missing values are reported by the form
    validator together with every other problem, not one at a time.
    """

    email: str = ""
    name: str = ""
    password: str = ""
    confirm_password: str = ""
    cep: str = ""
    address: str = ""
    number: str | None = None
    neighborhood: str = ""
    city: str = ""
    state: str = ""
    phone: str = ""
    cnpj: str = ""
    business_types: list[str] = Field(default_factory=list)


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: str = ""
    password: str = ""


class RegisterResponse(CamelModel):
    message: str
    user: AssociateRecord


class LoginResponse(CamelModel):
    message: str
    user: UserRecord


class BusinessTypesResponse(CamelModel):
    """Business categories offered on the registration form."""

    business_types: list[str]
