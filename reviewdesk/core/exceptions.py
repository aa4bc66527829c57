"""
core/exceptions.py
------------------
Application error taxonomy.

Every error carries the HTTP status it maps to and the message shown to the
client. The handlers registered in main.py render them as
{"message": ..., "errors": [...]} bodies.

  AuthError            401 / 500  token missing, rejected, or provider down
  FieldValidationError 400        payload shape, enum, or reference problems
  NotFoundError        404        missing OR owned by another tenant
  RepositoryError      500        storage failures; detail stays server-side
"""

from typing import Any, Dict, List, Optional, Sequence

from fastapi import status


class AppError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message}


# ── Authentication ────────────────────────────────────────────────────────────

class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class MissingTokenError(AuthError):
    message = "No token provided"


class InvalidTokenError(AuthError):
    message = "Invalid or expired token"


class AuthServiceUnavailableError(AuthError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Failed to validate token"


# ── Request validation ────────────────────────────────────────────────────────

def field_error(path: Sequence[Any], message: str, type_: str = "value_error") -> Dict[str, Any]:
    """Build one entry of the structured `errors` list."""
    return {"path": list(path), "message": message, "type": type_}


class FieldValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


# ── Lookup ────────────────────────────────────────────────────────────────────

class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource") -> None:
        super().__init__(f"{resource} not found")


# ── Storage ───────────────────────────────────────────────────────────────────

class RepositoryError(AppError):
    """
    Wraps an underlying SQLAlchemy failure. The original exception is kept
    as __cause__ (raise ... from exc) so it can be logged in full.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, detail: str) -> None:
        super().__init__()
        self.detail = detail

    def __str__(self) -> str:
        return self.detail
