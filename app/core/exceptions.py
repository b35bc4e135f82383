"""Domain exceptions for the attendance core.

Every exception carries a machine-readable ``code`` and the HTTP status it
maps to at the request boundary (see ``app.main``).
"""

TOKEN_REJECTED_MESSAGE = "Token is not valid or has expired"


class AttendanceError(Exception):
    """Base exception for business rule violations."""

    code = "attendance_error"
    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(AttendanceError):
    """Raised when a referenced event, user, token or attendance row does not exist."""

    code = "not_found"
    status_code = 404
    default_message = "Resource not found"


class TokenInvalid(AttendanceError):
    """Raised when a presented code does not resolve to any token."""

    code = "token_invalid"
    status_code = 404
    default_message = TOKEN_REJECTED_MESSAGE


class TokenExpired(AttendanceError):
    """Raised when a token resolves but is revoked or past its expiry."""

    code = "token_expired"
    status_code = 404
    default_message = TOKEN_REJECTED_MESSAGE


class AlreadyCheckedIn(AttendanceError):
    code = "already_checked_in"
    status_code = 409
    default_message = "You have already checked in with this token"


class ValidationError(AttendanceError):
    code = "validation_error"
    status_code = 422
    default_message = "Invalid input"


class Forbidden(AttendanceError):
    code = "forbidden"
    status_code = 403
    default_message = "Not authorized"


class CodeGenerationError(AttendanceError):
    """Raised when no unused token code could be found after several attempts."""

    code = "code_generation_failed"
    status_code = 503
    default_message = "Failed to generate a unique token code. Please try again."
