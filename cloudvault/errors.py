"""
Error taxonomy shared by the services and the HTTP layer.

Every error carries the HTTP status it maps to, so the handlers registered in
``cloudvault.app`` can answer with ``{"error": message}`` without knowing the
concrete type.
"""


class CloudVaultError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"error": self.message}


class ValidationError(CloudVaultError):
    """Client-fixable input problem."""
    status_code = 400
    message = "Invalid input"


class TooLarge(ValidationError):
    message = "File size limit exceeded"


class UnsupportedType(ValidationError):
    message = "File type not allowed"


class DuplicateError(CloudVaultError):
    status_code = 400
    message = "Resource already exists"


class AuthError(CloudVaultError):
    status_code = 401
    message = "Authentication required"


class InvalidToken(AuthError):
    message = "Invalid or expired token"


class NotFoundError(CloudVaultError):
    """Absent, or present but owned by somebody else."""
    status_code = 404
    message = "Not found"


class StorageError(CloudVaultError):
    # Database or object store failure. The detail goes to the log, never
    # to the client.
    status_code = 500
    message = "Storage service unavailable"
