# trees_api/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # Repository-level and HTTP-level errors
# │   ├── integrity_classifier.py    # SQL-level / DB-specific errors
# │   └── mapper.py                  # Map DB errors to repository errors, flatten errors into details

from .base import (
    RepositoryError,
    NotFoundError,
    DuplicateError,
    ValidationError,
    InvalidFieldError,
    ApiError,
    TreeNotFound,
    TreeRequestError,
)
from .mapper import describe_error, db_error_handler

__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "ValidationError",
    "InvalidFieldError",
    "ApiError",
    "TreeNotFound",
    "TreeRequestError",
    "describe_error",
    "db_error_handler",
]
