"""
Sort an `IntegrityError` into the constraint that was violated.

The classes below never leave the exceptions package: `mapper` turns them into
`DuplicateError`, `ValidationError` or a plain `RepositoryError`.
"""
import logging
from typing import Type

from sqlalchemy.exc import IntegrityError

from .base import RepositoryError

logger = logging.getLogger(__name__)


class ConstraintViolationError(RepositoryError):
    pass


class UniqueConstraintError(ConstraintViolationError):
    """Two Insects with the same name, for example."""


class NotNullConstraintError(ConstraintViolationError):
    """A required Trees column was left empty."""


class ForeignKeyConstraintError(ConstraintViolationError):
    """An InsectTrees row refers to a Tree or Insect that does not exist."""


class UnknownIntegrityError(ConstraintViolationError):
    pass


# Postgres SQLSTATE class 23 codes, see the "Error Codes" appendix of the Postgres docs
SQLSTATE_TO_VIOLATION: dict[str, Type[ConstraintViolationError]] = {
    "23505": UniqueConstraintError,
    "23502": NotNullConstraintError,
    "23503": ForeignKeyConstraintError,
}

# SQLite reports violations only through the message text
MESSAGE_FRAGMENTS: tuple[tuple[str, Type[ConstraintViolationError]], ...] = (
    ("unique constraint", UniqueConstraintError),
    ("unique failed", UniqueConstraintError),
    ("duplicate", UniqueConstraintError),
    ("not null constraint", NotNullConstraintError),
    ("null value in column", NotNullConstraintError),
    ("foreign key constraint", ForeignKeyConstraintError),
    ("is not present in table", ForeignKeyConstraintError),
)

Classification = tuple[Type[ConstraintViolationError], str | None]


def _sqlstate_of(orig) -> str | None:
    # psycopg 3 calls it `sqlstate`, psycopg2 `pgcode`
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _by_sqlstate(orig, sqlstate: str) -> Classification:
    diag = getattr(orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    violation = SQLSTATE_TO_VIOLATION.get(sqlstate)
    if violation is None:
        logger.warning("integrity.unknown_sqlstate", extra={"sqlstate": sqlstate, "constraint": constraint})
        return UnknownIntegrityError, constraint
    logger.debug("integrity.sqlstate", extra={"sqlstate": sqlstate, "constraint": constraint})
    return violation, constraint


def _by_message(text: str) -> Classification:
    lowered = text.lower()
    for fragment, violation in MESSAGE_FRAGMENTS:
        if fragment in lowered:
            return violation, None
    logger.warning("integrity.unknown_message", extra={"db_message": lowered[:200]})
    return UnknownIntegrityError, None


def classify_integrity_error(exc: IntegrityError) -> Classification:
    """
    Return `(violation class, constraint name or None)` for `exc`.

    The driver's SQLSTATE wins when present; otherwise the message is matched
    against known SQLite/Postgres wording.
    """
    orig = exc.orig
    sqlstate = _sqlstate_of(orig)
    if sqlstate:
        return _by_sqlstate(orig, sqlstate)
    return _by_message(str(orig) if orig is not None else str(exc))
