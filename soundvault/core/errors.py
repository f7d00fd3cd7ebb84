"""
Error taxonomy shared by services and the HTTP boundary.

Services raise one of the ``ServiceError`` subclasses below.  Each carries
an ``ErrorKind`` (what went wrong) and a fixed string ``code`` that is sent
to the client unchanged.
"""
import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    """Classification of failures."""
    NOT_FOUND = "NotFound"
    ACCESS_DENIED = "AccessDenied"
    UNAUTHENTICATED = "Unauthenticated"
    VALIDATION_ERROR = "ValidationError"
    CONFLICT = "Conflict"
    UNKNOWN_ERROR = "UnknownError"


# Fixed client-facing codes
UNKNOWN_ERROR = "UNKNOWN_ERROR"
NO_AVAILABLE_MUSIC = "NO_AVAILABLE_MUSIC"
ALBUM_NOT_FOUND = "ALBUM_NOT_FOUND"
PLAYLIST_NOT_FOUND = "PLAYLIST_NOT_FOUND"
ACCESS_DENIED = "ACCESS_DENIED"
USER_NOT_FOUND = "USER_NOT_FOUND"
USERNAME_NOT_AVAILABLE = "USERNAME_NOT_AVAILABLE"
USERNAME_OR_PASSWORD_MISSING = "USERNAME_OR_PASSWORD_MISSING"
USERNAME_MISSING = "USERNAME_MISSING"
PLAYLIST_NAME_MISSING = "PLAYLIST_NAME_MISSING"
TOKEN_EXPIRED = "TOKEN_EXPIRED"
INVALID_TOKEN = "INVALID_TOKEN"
NO_IMAGE_SUPPLIED = "NO_IMAGE_SUPPLIED"
INVALID_IMAGE_TYPE = "INVALID_IMAGE_TYPE"
IMAGE_TOO_LARGE = "IMAGE_TOO_LARGE"


class ServiceError(Exception):
    """Base class for classified failures raised by the service layer."""
    kind: ErrorKind = ErrorKind.UNKNOWN_ERROR
    default_code: str = UNKNOWN_ERROR

    def __init__(self, code: Optional[str] = None):
        self.code = code or self.default_code
        super().__init__(self.code)


class NotFoundError(ServiceError):
    """Entity does not exist or is not visible to the caller."""
    kind = ErrorKind.NOT_FOUND
    default_code = PLAYLIST_NOT_FOUND


class AccessDeniedError(ServiceError):
    """Caller lacks ownership rights for an owner-only action."""
    kind = ErrorKind.ACCESS_DENIED
    default_code = ACCESS_DENIED


class UnauthenticatedError(ServiceError):
    """Missing, invalid or expired credential."""
    kind = ErrorKind.UNAUTHENTICATED
    default_code = INVALID_TOKEN


class ValidationFailedError(ServiceError):
    """Required input missing or malformed."""
    kind = ErrorKind.VALIDATION_ERROR
    default_code = USERNAME_OR_PASSWORD_MISSING


class ConflictError(ServiceError):
    """Resource already taken."""
    kind = ErrorKind.CONFLICT
    default_code = USERNAME_NOT_AVAILABLE


LEGACY_STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ACCESS_DENIED: 404,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.VALIDATION_ERROR: 404,
    ErrorKind.CONFLICT: 404,
    ErrorKind.UNKNOWN_ERROR: 404,
}

SEMANTIC_STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ACCESS_DENIED: 403,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNKNOWN_ERROR: 500,
}


def status_code_for(kind: ErrorKind, mode: str = "legacy") -> int:
    """Map an error kind to an HTTP status under the given mode."""
    table = SEMANTIC_STATUS_CODES if mode == "semantic" else LEGACY_STATUS_CODES
    return table[kind]
