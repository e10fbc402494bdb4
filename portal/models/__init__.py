"""SQLAlchemy ORM models."""

from portal.models.base import Base
from portal.models.user import ROLE_ASSOCIATE, ROLE_SUPERVISOR, ROLES, Associate, Supervisor, User

__all__ = [
    "ROLE_ASSOCIATE",
    "ROLE_SUPERVISOR",
    "ROLES",
    "Associate",
    "Base",
    "Supervisor",
    "User",
]
