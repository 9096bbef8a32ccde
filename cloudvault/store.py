"""
Record store: the only place that writes users and vitals.

Every write re-runs the shared validators through the model ``@validates``
hooks, whatever the handler already checked.
"""

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from cloudvault.credentials import hash_password, verify_password
from cloudvault.errors import AuthError, DuplicateError, StorageError, ValidationError
from cloudvault.extensions import db
from cloudvault.models import User, VitalsRecord
from cloudvault.sanitizer import sanitize
from cloudvault.validators import password_message, validate_password

DUPLICATE_EMAIL = "Email already used. Please use a different email."


def _commit(what):
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Database error while saving {what}: {e}")
        raise StorageError()


def _normalize_email(email):
    if not isinstance(email, str):
        return ""
    return sanitize(email).lower()


def find_user_by_email(email):
    normalized = _normalize_email(email)
    if not normalized:
        return None
    return User.query.filter_by(email=normalized).first()


def get_user(user_id):
    return db.session.get(User, user_id)


def create_user(fields):
    password = fields.get("password") or ""
    missing = validate_password(password)
    if missing:
        raise ValidationError(password_message(missing))

    role = fields.get("role") or "patient"
    if find_user_by_email(fields.get("email")) is not None:
        raise DuplicateError(DUPLICATE_EMAIL)

    user = User(
        name=fields.get("name"),
        email=fields.get("email"),
        password_hash=hash_password(password),
        role=role,
        specialty=fields.get("specialty") if role == "doctor" else None,
    )
    db.session.add(user)
    try:
        _commit("user")
    except IntegrityError:
        # lost a race against a concurrent registration
        raise DuplicateError(DUPLICATE_EMAIL)

    current_app.logger.info(f"Registered {user.role} {user.id}")
    return user


def change_password(user, old_password, new_password):
    if not verify_password(old_password, user.password_hash):
        raise AuthError("Old password is incorrect")
    missing = validate_password(new_password)
    if missing:
        raise ValidationError(password_message(missing))

    user.password_hash = hash_password(new_password)
    _commit("password")
    current_app.logger.info(f"User {user.id} changed password")


def create_vitals(user_id, bp, sugar, heart_rate):
    record = VitalsRecord(user_id=user_id, bp=bp, sugar=sugar, heart_rate=heart_rate)
    db.session.add(record)
    try:
        _commit("vitals")
    except IntegrityError as e:
        current_app.logger.error(f"Vitals rejected by the database for user {user_id}: {e}")
        raise StorageError()
    return record


def list_vitals(user_id):
    return (
        VitalsRecord.query
        .filter_by(user_id=user_id)
        .order_by(VitalsRecord.created_at.desc(), VitalsRecord.id.desc())
        .all()
    )
