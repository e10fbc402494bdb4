"""ORM models for the base identity and its two role subtypes."""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    String,
    Text,
)

from portal.models.base import Base

ROLE_ASSOCIATE = "ASSOCIATE"
ROLE_SUPERVISOR = "SUPERVISOR"
ROLES = (ROLE_ASSOCIATE, ROLE_SUPERVISOR)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    Base identity shared by associates and supervisors.

    role: 'ASSOCIATE' or 'SUPERVISOR'; the matching subtype row holds the rest.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('ASSOCIATE', 'SUPERVISOR')", name="ck_users_role"),
    )

    id = Column(String(36), primary_key=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash
    role = Column(String(16), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class Associate(Base):
    """Member business registered through the public form."""

    __tablename__ = "associates"

    id = Column(String(36), primary_key=True)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    cep = Column(String(16), nullable=False)
    address = Column(String(255), nullable=False)
    number = Column(String(32), nullable=True)
    neighborhood = Column(String(255), nullable=False)
    city = Column(String(255), nullable=False)
    state = Column(String(64), nullable=False)
    phone = Column(String(32), nullable=False)
    cnpj = Column(String(32), nullable=False, unique=True, index=True)
    business_types = Column(Text, nullable=False)  # JSON array
    is_active = Column(Boolean, nullable=False, default=True)


class Supervisor(Base):
    """Administrator account; permissions is a JSON array of capability tags."""

    __tablename__ = "supervisors"

    id = Column(String(36), primary_key=True)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    permissions = Column(Text, nullable=False)  # JSON array
