"""Custom exception classes for the Attendance API.

Every exception carries the HTTP status it maps to. Managers and the
authentication flow raise these; the handlers in ``core.error_handlers``
turn them into JSON error responses.
"""

from typing import Optional


class AttendanceError(Exception):
    """Base exception for all Attendance API errors."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        """Initialize the exception.

        Args:
            message: Client-facing message. Falls back to the class default.
        """
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(AttendanceError):
    """Raised when request input is missing or invalid."""

    status_code = 400
    default_message = "Bad request"


class ConflictError(BadRequestError):
    """Raised when a unique field (email, matric number) is already taken.

    Reported with status 400, like every other input error.
    """

    default_message = "Record already exists"


class InvalidOtpError(BadRequestError):
    """Raised when a one-time code is unknown or expired."""

    default_message = "Invalid or expired OTP"


class UnauthorizedError(AttendanceError):
    """Raised when authentication fails."""

    status_code = 401
    default_message = "Please login to access this resource"


class InvalidTokenError(UnauthorizedError):
    """Raised when a bearer token is malformed, forged or expired."""

    default_message = "Invalid token, please login to access this resource"


class NotFoundError(AttendanceError):
    """Raised when a requested record cannot be found."""

    status_code = 404
    default_message = "Resource not found"


class InternalError(AttendanceError):
    """Raised for unexpected store or notification failures."""

    pass


class MailDeliveryError(InternalError):
    """Raised when an email cannot be handed to the SMTP server."""

    default_message = "Email could not be sent"
