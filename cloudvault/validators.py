"""
Field validators shared by the request schemas and the storage models.

Every validator takes the raw string and reports a problem as a return value;
none of them raise for bad input.
"""

import re
from collections import namedtuple

ValidationResult = namedtuple("ValidationResult", ["valid", "message"])

OK = ValidationResult(True, None)

BP_RE = re.compile(r"^([0-9]{1,3})/([0-9]{1,3})$")
INT_RE = re.compile(r"^[0-9]+$")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NAME_RE = re.compile(r"^[a-zA-Z\s]+$")

PASSWORD_SYMBOLS = "!@#$%^&*"
PASSWORD_MIN_LENGTH = 8
# bcrypt ignores everything past 72 bytes
PASSWORD_MAX_BYTES = 72

ROLES = ("patient", "doctor")

SYSTOLIC_RANGE = (70, 250)
DIASTOLIC_RANGE = (40, 150)
SUGAR_RANGE = (20, 600)
HEART_RATE_RANGE = (30, 220)
NAME_MIN, NAME_MAX = 2, 50
EMAIL_MAX = 254
SPECIALTY_MIN, SPECIALTY_MAX = 2, 100


def _fail(message):
    return ValidationResult(False, message)


def _as_text(value):
    if value is None:
        return ""
    return str(value).strip()


def _int_in_range(value, bounds):
    text = _as_text(value)
    if not INT_RE.match(text):
        return False
    low, high = bounds
    return low <= int(text) <= high


def validate_blood_pressure(value):
    match = BP_RE.match(_as_text(value))
    if not match:
        return _fail("Blood pressure must be in format 'systolic/diastolic' (e.g., 120/80)")

    systolic, diastolic = int(match.group(1)), int(match.group(2))
    if not SYSTOLIC_RANGE[0] <= systolic <= SYSTOLIC_RANGE[1]:
        return _fail("Systolic pressure must be between 70-250 mmHg")
    if not DIASTOLIC_RANGE[0] <= diastolic <= DIASTOLIC_RANGE[1]:
        return _fail("Diastolic pressure must be between 40-150 mmHg")
    if systolic <= diastolic:
        return _fail("Systolic pressure must be higher than diastolic pressure")
    return OK


def validate_sugar(value):
    if not _int_in_range(value, SUGAR_RANGE):
        return _fail("Sugar level must be a number between 20-600 mg/dL")
    return OK


def validate_heart_rate(value):
    if not _int_in_range(value, HEART_RATE_RANGE):
        return _fail("Heart rate must be a number between 30-220 bpm")
    return OK


def validate_email(value):
    if not isinstance(value, str) or not EMAIL_RE.match(value.strip()):
        return _fail("Please provide a valid email address")
    if len(value.strip()) > EMAIL_MAX:
        return _fail("Email cannot exceed 254 characters")
    return OK


def validate_password(value):
    """Return the list of unmet password requirements (empty when valid)."""
    if not isinstance(value, str):
        value = ""
    missing = []
    if len(value) < PASSWORD_MIN_LENGTH:
        missing.append("at least 8 characters")
    if not re.search(r"[A-Z]", value):
        missing.append("one uppercase letter")
    if not re.search(r"[a-z]", value):
        missing.append("one lowercase letter")
    if not re.search(r"[0-9]", value):
        missing.append("one number")
    if not any(ch in PASSWORD_SYMBOLS for ch in value):
        missing.append("one special character (!@#$%^&*)")
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        missing.append("at most 72 bytes")
    return missing


def password_message(missing):
    return "Password must contain " + ", ".join(missing) + "."


def validate_name(value):
    text = _as_text(value)
    if len(text) < NAME_MIN or not NAME_RE.match(text):
        return _fail("Name must be at least 2 characters and contain only letters and spaces.")
    return OK


def validate_specialty(value):
    text = _as_text(value)
    if not SPECIALTY_MIN <= len(text) <= SPECIALTY_MAX:
        return _fail("Specialty is required for doctors and must be 2-100 characters.")
    return OK


def validate_role(value):
    if value not in ROLES:
        return _fail("Role must be either 'patient' or 'doctor'.")
    return OK
