from marshmallow import EXCLUDE, Schema, fields, validates_schema
from marshmallow import ValidationError as SchemaError

from cloudvault import validators
from cloudvault.errors import ValidationError

REQUIRED = fields.Field.default_error_messages["required"]


def _rule(check):
    """Adapt a shared validator to marshmallow's raise-on-failure style."""
    def run(value):
        result = check(value)
        if not result.valid:
            raise SchemaError(result.message)
    return run


def _password_rule(value):
    missing = validators.validate_password(value)
    if missing:
        raise SchemaError(validators.password_message(missing))


class RequestSchema(Schema):
    class Meta:
        unknown = EXCLUDE


class RegisterSchema(RequestSchema):
    name      = fields.Str(required=True, validate=_rule(validators.validate_name))
    email     = fields.Str(required=True, validate=_rule(validators.validate_email))
    password  = fields.Str(required=True, validate=_password_rule)
    role      = fields.Str(required=True, validate=_rule(validators.validate_role))
    specialty = fields.Str(load_default=None, allow_none=True)

    @validates_schema
    def _specialty_for_doctors(self, data, **kwargs):
        if data.get("role") == "doctor":
            result = validators.validate_specialty(data.get("specialty"))
            if not result.valid:
                raise SchemaError(result.message, "specialty")


class LoginSchema(RequestSchema):
    email    = fields.Str(required=True)
    password = fields.Str(required=True)


class ChangePasswordSchema(RequestSchema):
    old_password = fields.String(required=True)
    new_password = fields.String(required=True, validate=_password_rule)


class VitalsSchema(RequestSchema):
    bp         = fields.Str(required=True, validate=_rule(validators.validate_blood_pressure))
    sugar      = fields.Str(required=True, validate=_rule(validators.validate_sugar))
    heart_rate = fields.Str(required=True, data_key="heartRate",
                            validate=_rule(validators.validate_heart_rate))


class VitalsRecordSchema(Schema):
    id         = fields.Int(dump_only=True)
    user_id    = fields.Int(dump_only=True, data_key="userId")
    bp         = fields.Str(dump_only=True)
    sugar      = fields.Str(dump_only=True)
    heart_rate = fields.Str(dump_only=True, data_key="heartRate")
    created_at = fields.DateTime(dump_only=True, data_key="createdAt")


class FileRecordSchema(Schema):
    id          = fields.Int(dump_only=True)
    user_id     = fields.Int(dump_only=True, data_key="userId")
    file_name   = fields.Str(dump_only=True, data_key="fileName")
    storage_key = fields.Str(dump_only=True, data_key="storageKey")
    size        = fields.Int(dump_only=True)
    mime_type   = fields.Str(dump_only=True, data_key="mimeType")
    created_at  = fields.DateTime(dump_only=True, data_key="createdAt")


class UserProfileSchema(Schema):
    id         = fields.Int(dump_only=True)
    name       = fields.Str(dump_only=True)
    email      = fields.Str(dump_only=True)
    role       = fields.Str(dump_only=True)
    specialty  = fields.Str(dump_only=True)
    created_at = fields.DateTime(dump_only=True, data_key="createdAt")


def first_message(messages):
    """Dig the first human readable message out of marshmallow's error dict."""
    if isinstance(messages, str):
        return messages
    if isinstance(messages, dict):
        for value in messages.values():
            return first_message(value)
    if isinstance(messages, (list, tuple)) and messages:
        return first_message(messages[0])
    return "Invalid input"


def load_or_400(schema, data, missing_message=None):
    """Load a request body, turning schema errors into a 400 ValidationError.

    When ``missing_message`` is given it replaces the per-field errors as soon
    as any required field is absent.
    """
    if not isinstance(data, dict):
        data = {}
    try:
        return schema.load(data)
    except SchemaError as e:
        messages = e.messages if isinstance(e.messages, dict) else {}
        if missing_message and any(v == [REQUIRED] for v in messages.values()):
            raise ValidationError(missing_message)
        raise ValidationError(first_message(e.messages))
