"""
Exceptions raised by the repository layer and by the HTTP handlers.

Two levels, mirroring how the API is built:

- Repository-level (`RepositoryError` and subclasses): raised from repository methods,
  independent of HTTP. A storage failure, a missing row, a duplicate, or a list of
  column validation messages.
- HTTP-level (`ApiError` and subclasses): the `{status, message, details}` payload the
  error responder writes. Route handlers translate repository errors into these.
"""

from typing import Iterable


# -----------------------------------------------------------------------------
# Repository-level exceptions
# -----------------------------------------------------------------------------

class RepositoryError(Exception):
    """
    Base exception for repository errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of column names related to the error (e.g. ['tree'])
    - errors: optional list of individual error messages; when present, callers
      report them joined instead of `message`
    - constraint: optional DB constraint name (for logs only)
    """

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 errors: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.errors = list(errors) if errors else []
        self.constraint = constraint

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base


class NotFoundError(RepositoryError):
    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields)


class DuplicateError(RepositoryError):
    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint)


class ValidationError(RepositoryError):
    """
    One or more column values were rejected before reaching the database.

    `errors` holds one message per offending column, e.g.
    ["Tree.tree cannot be null", "Tree.location cannot be null"].
    """

    def __init__(self, message: str = "Validation error", *, fields: Iterable[str] | None = None,
                 errors: Iterable[str] | None = None):
        super().__init__(message, fields=fields, errors=errors)


class InvalidFieldError(RepositoryError):
    """Raised when the caller passes unknown attribute names to repository methods."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields)


# -----------------------------------------------------------------------------
# HTTP-level errors
# -----------------------------------------------------------------------------

class ApiError(Exception):
    """
    Structured error forwarded to the error responder.

    Serialized as `{"status": ..., "message": ..., "details": ...}`; `details` is
    omitted when None. Every handler-level failure is reported with HTTP 400
    unless a subclass or caller says otherwise.
    """

    status: str = "error"
    http_status: int = 400

    def __init__(self, message: str, details: str | None = None, *,
                 status: str | None = None, http_status: int | None = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status is not None:
            self.status = status
        if http_status is not None:
            self.http_status = http_status

    def to_payload(self) -> dict:
        payload = {"status": self.status, "message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class TreeNotFound(ApiError):
    """The requested tree id matches no row."""
    status = "not-found"


class TreeRequestError(ApiError):
    """Mismatched ids, rejected values or storage failures while serving a tree request."""
    status = "error"


__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "ValidationError",
    "InvalidFieldError",
    "ApiError",
    "TreeNotFound",
    "TreeRequestError",
]
