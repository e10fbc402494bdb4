"""
Identity store: users plus their associate/supervisor subtype rows.

Each public function is one logical transaction on the caller's session:
commit on success, explicit rollback on failure. Write failures are reported
as None/False so handlers can answer 409; plaintext passwords and hashes never
leave this module (records carry password="").
"""

import json
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.core.exceptions import IdentityStoreError
from portal.core.security import burn_password_check, hash_password, verify_password
from portal.models import ROLE_ASSOCIATE, ROLE_SUPERVISOR, Associate, Supervisor, User
from portal.schemas.auth import RegisterRequest
from portal.schemas.users import AssociateRecord, SupervisorRecord
from portal.services.validation import format_cnpj, only_digits

logger = logging.getLogger(__name__)

UserRecordType = AssociateRecord | SupervisorRecord

DEFAULT_SUPERVISOR_PERMISSIONS = (
    "manage_users",
    "view_reports",
    "system_admin",
    "create_associates",
    "edit_associates",
    "delete_associates",
    "view_analytics",
)


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is written in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _associate_record(user: User, associate: Associate) -> AssociateRecord:
    return AssociateRecord(
        id=associate.id,
        user_id=user.id,
        email=user.email,
        name=user.name,
        cep=associate.cep,
        address=associate.address,
        number=associate.number,
        neighborhood=associate.neighborhood,
        city=associate.city,
        state=associate.state,
        phone=associate.phone,
        cnpj=format_cnpj(associate.cnpj),
        business_types=json.loads(associate.business_types),
        is_active=bool(associate.is_active),
        created_at=_as_utc(user.created_at),
        updated_at=_as_utc(user.updated_at),
    )


def _supervisor_record(user: User, supervisor: Supervisor) -> SupervisorRecord:
    return SupervisorRecord(
        id=supervisor.id,
        user_id=user.id,
        email=user.email,
        name=user.name,
        permissions=json.loads(supervisor.permissions),
        created_at=_as_utc(user.created_at),
        updated_at=_as_utc(user.updated_at),
    )


def _to_record(
    user: User,
    associate: Associate | None,
    supervisor: Supervisor | None,
) -> UserRecordType | None:
    """Pick the subtype named by user.role; None if that row is missing or unreadable."""
    try:
        if user.role == ROLE_ASSOCIATE and associate is not None:
            return _associate_record(user, associate)
        if user.role == ROLE_SUPERVISOR and supervisor is not None:
            return _supervisor_record(user, supervisor)
    except ValueError:
        logger.exception("User %s has a malformed subtype row", user.id)
        return None
    logger.warning("User %s has role %s but no matching subtype row", user.id, user.role)
    return None


# ── Create ──────────────────────────────────────────────────────────
def create_associate(session: Session, data: RegisterRequest) -> AssociateRecord | None:
    """
    Insert a user (role ASSOCIATE) and its associate row in one transaction.

    The CNPJ is stored as its 14 digits so punctuation cannot sidestep the
    unique index. Returns None when anything fails, most often a duplicate
    email or CNPJ; in that case nothing is persisted.
    """
    user = User(
        id=_new_id(),
        email=data.email,
        name=data.name,
        password=hash_password(data.password),
        role=ROLE_ASSOCIATE,
    )
    associate = Associate(
        id=_new_id(),
        user_id=user.id,
        cep=data.cep,
        address=data.address,
        number=data.number,
        neighborhood=data.neighborhood,
        city=data.city,
        state=data.state,
        phone=data.phone,
        cnpj=only_digits(data.cnpj),
        business_types=json.dumps(data.business_types),
        is_active=True,
    )
    try:
        session.add(user)
        session.flush()
        session.add(associate)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Error creating associate for email %s", data.email)
        return None
    logger.info("Associate %s created (user %s)", associate.id, user.id)
    return _associate_record(user, associate)


def create_supervisor(
    session: Session,
    email: str,
    name: str,
    password: str,
    permissions: list[str] | None = None,
) -> SupervisorRecord | None:
    """Insert a user (role SUPERVISOR) and its supervisor row in one transaction."""
    if permissions is None:
        permissions = list(DEFAULT_SUPERVISOR_PERMISSIONS)
    user = User(
        id=_new_id(),
        email=email,
        name=name,
        password=hash_password(password),
        role=ROLE_SUPERVISOR,
    )
    supervisor = Supervisor(
        id=_new_id(),
        user_id=user.id,
        permissions=json.dumps(permissions),
    )
    try:
        session.add(user)
        session.flush()
        session.add(supervisor)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Error creating supervisor for email %s", email)
        return None
    logger.info("Supervisor %s created (user %s)", supervisor.id, user.id)
    return _supervisor_record(user, supervisor)


# ── Read ────────────────────────────────────────────────────────────
def authenticate_user(session: Session, email: str, password: str) -> UserRecordType | None:
    """
    Return the hydrated record for a valid email/password pair, else None.

    Unknown email and wrong password are indistinguishable to the caller,
    both in result and in bcrypt work performed.
    """
    try:
        user = session.query(User).filter(User.email == email).first()
        if user is None:
            burn_password_check(password)
            return None
        if not verify_password(password, user.password):
            return None

        associate = supervisor = None
        if user.role == ROLE_ASSOCIATE:
            associate = session.query(Associate).filter(Associate.user_id == user.id).first()
        else:
            supervisor = session.query(Supervisor).filter(Supervisor.user_id == user.id).first()
        return _to_record(user, associate, supervisor)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Error authenticating user")
        return None


def get_all_users(session: Session) -> list[UserRecordType]:
    """
    Every user with its subtype fields, newest first.

    Raises IdentityStoreError when the roster cannot be read, so an empty
    list always means "no users".
    """
    try:
        rows = (
            session.query(User, Associate, Supervisor)
            .outerjoin(Associate, Associate.user_id == User.id)
            .outerjoin(Supervisor, Supervisor.user_id == User.id)
            .order_by(User.created_at.desc())
            .all()
        )
        records = [_to_record(user, associate, supervisor) for user, associate, supervisor in rows]
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Error loading users")
        raise IdentityStoreError("Failed to load users", cause=e) from e
    return [r for r in records if r is not None]


def resolve_user_id(session: Session, any_id: str) -> str | None:
    """
    Map an associate id, supervisor id or base-user id to the base-user id.

    One lookup over all three id spaces. If the id matches rows owned by
    different users it is ambiguous and None is returned.
    """
    if not any_id:
        return None
    rows = (
        session.query(User.id)
        .outerjoin(Associate, Associate.user_id == User.id)
        .outerjoin(Supervisor, Supervisor.user_id == User.id)
        .filter(or_(User.id == any_id, Associate.id == any_id, Supervisor.id == any_id))
        .distinct()
        .all()
    )
    if not rows:
        return None
    if len(rows) > 1:
        logger.error("Id %s matches %d different users; refusing to resolve", any_id, len(rows))
        return None
    return rows[0][0]


# ── Update / delete ─────────────────────────────────────────────────
def update_user(
    session: Session,
    subtype_id: str,
    *,
    name: str | None = None,
    email: str | None = None,
    role: str | None = None,
    is_active: bool | None = None,
) -> bool:
    """
    Apply the provided fields to the user behind ``subtype_id``.

    name/email/role go to the users row; is_active goes to the associate row
    of the same user (matches nothing for a supervisor). Promoting to
    SUPERVISOR creates an empty-permission supervisor row if there is none;
    demoting to ASSOCIATE requires an existing associate row.
    Returns False (after rollback) if the id is unknown or any write fails.
    """
    try:
        user_id = resolve_user_id(session, subtype_id)
        user = session.get(User, user_id) if user_id else None
        if user is None:
            logger.info("Update skipped: no user for id %s", subtype_id)
            session.rollback()
            return False

        if role is not None and role != user.role:
            if role == ROLE_SUPERVISOR:
                has_row = session.query(Supervisor.id).filter(Supervisor.user_id == user.id).first()
                if has_row is None:
                    session.add(Supervisor(id=_new_id(), user_id=user.id, permissions="[]"))
            elif role == ROLE_ASSOCIATE:
                has_row = session.query(Associate.id).filter(Associate.user_id == user.id).first()
                if has_row is None:
                    logger.info("Cannot make user %s an associate: no associate data", user.id)
                    session.rollback()
                    return False

        changed = False
        if name is not None:
            user.name = name
            changed = True
        if email is not None:
            user.email = email
            changed = True
        if role is not None:
            user.role = role
            changed = True
        if is_active is not None:
            session.query(Associate).filter(Associate.user_id == user.id).update(
                {Associate.is_active: is_active}, synchronize_session=False
            )
            changed = True
        if changed:
            user.updated_at = _utcnow()

        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Error updating user %s", subtype_id)
        return False
    logger.info("User %s updated", user_id)
    return True


def delete_user(session: Session, subtype_id: str) -> bool:
    """Delete the user behind ``subtype_id``; the subtype row goes with it (ON DELETE CASCADE)."""
    try:
        user_id = resolve_user_id(session, subtype_id)
        deleted = 0
        if user_id is not None:
            deleted = (
                session.query(User)
                .filter(User.id == user_id)
                .delete(synchronize_session=False)
            )
        if deleted == 0:
            session.rollback()
            logger.info("Delete skipped: no user for id %s", subtype_id)
            return False
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Error deleting user %s", subtype_id)
        return False
    logger.info("User %s deleted", user_id)
    return True
