"""
Domain errors and their HTTP mapping.

Services raise these; handlers registered in main turn them into
``{"error": ..., "detail": ...}`` JSON bodies.
"""

import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE codes
FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"


class HubError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, detail: Any = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.detail is not None:
            body["detail"] = self.detail
        return body


class InvalidArgument(HubError):
    status_code = 400
    default_message = "Invalid argument"


class Forbidden(HubError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(HubError):
    status_code = 404
    default_message = "Not found"


class ReferenceNotFound(NotFound):
    """A referenced row is missing on write (foreign key violation)."""

    status_code = 400
    default_message = "Referenced row not found"


class Conflict(HubError):
    status_code = 409
    default_message = "Conflict"


class Internal(HubError):
    status_code = 500


def constraint_code(exc: IntegrityError) -> Optional[str]:
    """
    Return the SQLSTATE-style code for an integrity error.

    psycopg2 exposes ``pgcode``, psycopg 3 ``sqlstate``; SQLite only has the
    message text, which is mapped onto the same codes.
    """
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code:
        return code

    message = str(orig or exc).upper()
    if "FOREIGN KEY" in message:
        return FOREIGN_KEY_VIOLATION
    if "UNIQUE" in message or "PRIMARY KEY" in message:
        return UNIQUE_VIOLATION
    return None


def translate_integrity_error(
    exc: IntegrityError,
    not_found_message: str = "Referenced row not found",
    conflict_message: str = "Duplicate value",
) -> HubError:
    """Map a persistence constraint violation onto the error taxonomy."""
    detail = str(getattr(exc, "orig", None) or exc)
    code = constraint_code(exc)
    if code == FOREIGN_KEY_VIOLATION:
        return ReferenceNotFound(not_found_message, detail=detail)
    if code == UNIQUE_VIOLATION:
        return Conflict(conflict_message, detail=detail)
    logger.error("Unclassified integrity error: %s", detail)
    return Internal("Database constraint violation", detail=detail)
