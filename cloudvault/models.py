# cloudvault/models.py

from datetime import datetime, timezone

from sqlalchemy.orm import validates

from cloudvault.errors import ValidationError
from cloudvault.extensions import db
from cloudvault.sanitizer import sanitize
from cloudvault import validators


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _check(result):
    if not result.valid:
        raise ValidationError(result.message)


def _link_table(name):
    return db.Table(
        name,
        db.Column("user_id", db.Integer, db.ForeignKey("users.id"), primary_key=True),
        db.Column("other_id", db.Integer, db.ForeignKey("users.id"), primary_key=True),
    )


consulted_doctors_table = _link_table("consulted_doctors")
consulted_patients_table = _link_table("consulted_patients")
pending_consultations_table = _link_table("pending_consultations")


def _user_links(table):
    return db.relationship(
        "User",
        secondary=table,
        primaryjoin=lambda: User.id == table.c.user_id,
        secondaryjoin=lambda: User.id == table.c.other_id,
        lazy="select",
    )


class User(db.Model):
    __tablename__ = "users"
    id             = db.Column(db.Integer, primary_key=True)
    name           = db.Column(db.String(50), nullable=False)
    email          = db.Column(db.String(254), unique=True, nullable=False)
    password_hash  = db.Column(db.Text, nullable=False)
    role           = db.Column(db.String(20), nullable=False, default="patient")
    specialty      = db.Column(db.String(100))
    created_at     = db.Column(db.DateTime, default=utcnow, nullable=False)

    # patients: doctors they consult; doctors: patients they see and
    # patients waiting for an answer to a consultation request
    consulted_doctors     = _user_links(consulted_doctors_table)
    consulted_patients    = _user_links(consulted_patients_table)
    pending_consultations = _user_links(pending_consultations_table)

    def __init__(self, **kwargs):
        kwargs.setdefault("role", "patient")
        super().__init__(**kwargs)
        if self.role == "doctor" and not self.specialty:
            raise ValidationError("Specialty is required for doctors and must be 2-100 characters.")
        if self.role != "doctor" and self.specialty:
            raise ValidationError("Only doctors can have a specialty.")

    @validates("name")
    def _validate_name(self, key, value):
        value = sanitize(value)
        _check(validators.validate_name(value))
        if len(value) > validators.NAME_MAX:
            raise ValidationError("Name cannot exceed 50 characters")
        return value

    @validates("email")
    def _validate_email(self, key, value):
        value = sanitize(value)
        _check(validators.validate_email(value))
        return value.lower()

    @validates("role")
    def _validate_role(self, key, value):
        _check(validators.validate_role(value))
        return value

    @validates("specialty")
    def _validate_specialty(self, key, value):
        if value is None:
            return None
        value = sanitize(value)
        _check(validators.validate_specialty(value))
        return value

    @property
    def is_doctor(self):
        return self.role == "doctor"


class VitalsRecord(db.Model):
    __tablename__ = "vitals_records"
    __table_args__ = (db.Index("ix_vitals_user_created", "user_id", "created_at"),)

    id          = db.Column(db.Integer, primary_key=True)
    user_id     = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    bp          = db.Column(db.String(16), nullable=False)
    sugar       = db.Column(db.String(16), nullable=False)
    heart_rate  = db.Column(db.String(16), nullable=False)
    created_at  = db.Column(db.DateTime, default=utcnow, nullable=False)

    user = db.relationship("User", backref=db.backref("vitals", lazy="dynamic"))

    @validates("user_id")
    def _validate_user_id(self, key, value):
        if value is None:
            raise ValidationError("User ID is required")
        return value

    @validates("bp")
    def _validate_bp(self, key, value):
        value = (value or "").strip()
        _check(validators.validate_blood_pressure(value))
        return value

    @validates("sugar")
    def _validate_sugar(self, key, value):
        value = str(value or "").strip()
        _check(validators.validate_sugar(value))
        return value

    @validates("heart_rate")
    def _validate_heart_rate(self, key, value):
        value = str(value or "").strip()
        _check(validators.validate_heart_rate(value))
        return value


class FileRecord(db.Model):
    __tablename__ = "file_records"

    id          = db.Column(db.Integer, primary_key=True)
    user_id     = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    file_name   = db.Column(db.String(255), nullable=False)
    storage_key = db.Column(db.String(500), nullable=False, unique=True)
    size        = db.Column(db.BigInteger, nullable=False)
    mime_type   = db.Column(db.String(255), nullable=False)
    created_at  = db.Column(db.DateTime, default=utcnow, nullable=False)

    user = db.relationship("User", backref=db.backref("files", lazy="dynamic"))
