"""
Domain error taxonomy.

Services raise these instead of HTTPException so the same rules can be
exercised without a request; main.py maps them to JSON responses with a
stable machine-readable ``code``.
"""

from typing import Any, Optional


class SalonError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None, extra: Optional[dict[str, Any]] = None):
        self.message = message or self.default_message
        if code:
            self.code = code
        self.extra = extra or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body = {"detail": self.message, "code": self.code}
        body.update(self.extra)
        return body


class ValidationError(SalonError):
    """Missing or malformed required fields"""

    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid request"


class ConflictError(SalonError):
    """Requested interval overlaps an existing appointment"""

    status_code = 400
    code = "SCHEDULE_CONFLICT"
    default_message = "The manicurist is not available at that date and time"


class NotFoundError(SalonError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Resource not found"


class ForbiddenError(SalonError):
    status_code = 403
    code = "FORBIDDEN"
    default_message = "You do not have permission to perform this action"


class AuthenticationError(SalonError):
    status_code = 401
    code = "NOT_AUTHENTICATED"
    default_message = "Not authenticated"


class InternalError(SalonError):
    """Persistence failure; the caller only ever sees the generic message"""
