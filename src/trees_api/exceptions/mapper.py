"""
Turn driver-level failures into repository exceptions, and repository exceptions
into the `details` string of an error payload.
"""
import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import (
    classify_integrity_error,
    UniqueConstraintError,
    NotNullConstraintError,
    ForeignKeyConstraintError,
)
from .base import DuplicateError, RepositoryError, ValidationError

logger = logging.getLogger(__name__)

# Each pattern captures the offending column list as `cols`
_COLUMN_PATTERNS = (
    re.compile(r'null value in column "(?P<cols>[^"]+)"', re.IGNORECASE),      # Postgres NOT NULL
    re.compile(r'key \((?P<cols>[^)]+)\)=', re.IGNORECASE),                    # Postgres DETAIL line
    re.compile(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', re.IGNORECASE),  # SQLite
)


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """Column names named in the driver message, without their table prefix."""
    text = str(exc.orig) if exc.orig is not None else str(exc)
    for pattern in _COLUMN_PATTERNS:
        match = pattern.search(text)
        if match is None:
            continue
        return [col.split(".")[-1].strip().strip('"') for col in re.split(r",\s*", match.group("cols"))]
    return None


def describe_error(exc: BaseException) -> str:
    """
    Flatten an exception into the `details` string of an error payload.

    A non-empty `errors` list (see `ValidationError`) is joined with ", ";
    anything else falls back to the exception's message.
    """
    errors = getattr(exc, "errors", None)
    if isinstance(errors, (list, tuple)) and errors:
        return ", ".join(getattr(item, "message", str(item)) for item in errors)
    return getattr(exc, "message", None) or str(exc)


def _duplicate(model: str, columns, constraint) -> RepositoryError:
    if not columns:
        return DuplicateError(f"{model} already exists", constraint=constraint)
    return DuplicateError(f"{model} already exists for field(s): {', '.join(columns)}",
                          fields=columns, constraint=constraint)


def _missing(model: str, columns, constraint) -> RepositoryError:
    errors = [f"{model}.{col} cannot be null" for col in columns] if columns else None
    return ValidationError(f"Missing required field for {model}", fields=columns, errors=errors)


def _dangling(model: str, columns, constraint) -> RepositoryError:
    return RepositoryError(f"{model} referenced entity not found", fields=columns, constraint=constraint)


_BUILDERS = {
    UniqueConstraintError: ("integrity.duplicate", _duplicate),
    NotNullConstraintError: ("integrity.not_null", _missing),
    ForeignKeyConstraintError: ("integrity.foreign_key", _dangling),
}


def raise_mapped_integrity_error(exc: IntegrityError, model_name: str | None = None) -> None:
    """Raise the repository exception matching `exc`, chained to it."""
    violation, constraint = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    model = model_name or "Record"

    entry = _BUILDERS.get(violation)
    if entry is None:
        logger.warning("integrity.unmapped", extra={"model": model, "constraint": constraint})
        raise RepositoryError(f"{model} database integrity error.") from exc

    event, build = entry
    logger.info(event, extra={"model": model, "fields": columns, "constraint": constraint})
    raise build(model, columns, constraint) from exc


async def _rollback_quietly(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("repo.rollback_failed", extra={"model": model_name})


@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Wrap a block of session work for `model_name`.

    On failure the session is rolled back and the error leaves as a
    `RepositoryError` subclass:

        async with db_error_handler(self.db, "Tree"):
            self.db.add(tree)
            await self.db.flush()
    """
    try:
        yield
    except RepositoryError:
        await db.rollback()
        raise
    except IntegrityError as exc:
        await _rollback_quietly(db, model_name)
        raise_mapped_integrity_error(exc, model_name)
    except Exception as exc:
        await _rollback_quietly(db, model_name)
        logger.exception("repo.unexpected_error", extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}") from exc
