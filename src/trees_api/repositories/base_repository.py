"""
Base repository class providing common database operations.

This class serves as a reusable foundation for repositories that interact with
the database using SQLAlchemy's async sessions. Model-specific repositories
inherit from it and add their own queries.

Repositories never commit: they `flush()` so ids and server defaults are
available, and leave `commit()` to the caller (route handler or seeder) so
several operations can share one transaction.
"""
from trees_api.exceptions.base import (
    RepositoryError,
    DuplicateError,
    NotFoundError,
    InvalidFieldError,
    ValidationError,
)

from trees_api.exceptions.mapper import db_error_handler
from trees_api.validators.model_validators import (
    find_unknown_model_kwargs,
    find_missing_required,
    find_unique_conflicts,
)

import time
from typing import TypeVar, Generic, Type, Any, Iterable
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
import logging

from trees_api.database.base import Base

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: The SQLAlchemy model class (e.g. Tree, not Tree())
            db: The async database session
        """
        self.model = model
        self.db = db

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def create(self, **kwargs) -> ModelType:
        """
        Create an entity with validation + DB write. Logging:
        - DEBUG: start event with model name and provided keys (not values).
        - INFO: expected domain errors (invalid fields, missing required, duplicate).
        - INFO: success event with created id and duration_ms.

        Raises:
            InvalidFieldError: unknown attribute names were passed
            ValidationError: required columns are missing; `errors` lists
                one "<Model>.<column> cannot be null" message per column
            DuplicateError: a unique constraint would be violated
            RepositoryError: any other database failure
        """
        model_name = self.model.__name__

        logger.debug(
            "repo.create.start",
            extra={
                "model": model_name,
                "operation": "create",
                "provided_keys": sorted(kwargs.keys()),
            },
        )

        # 1) unknown fields
        unknown = find_unknown_model_kwargs(self.model, kwargs)
        if unknown:
            logger.info(
                "repo.create.invalid_fields",
                extra={"model": model_name, "operation": "create", "invalid_fields": sorted(unknown)},
            )
            raise InvalidFieldError(f"Unknown field(s) for {model_name}: {', '.join(unknown)}", fields=unknown)

        # 2) required columns (all missing ones are reported, not just the first)
        missing = find_missing_required(self.model, kwargs)
        if missing:
            logger.info(
                "repo.create.missing_required",
                extra={"model": model_name, "operation": "create", "missing_fields": missing},
            )
            raise ValidationError(
                f"Missing required field(s): {', '.join(missing)} for {model_name}",
                fields=missing,
                errors=[f"{model_name}.{column} cannot be null" for column in missing],
            )

        # 3) pre-check unique conflicts (best-effort; the DB constraint still backs it up)
        conflicts = await find_unique_conflicts(self.db, self.model, kwargs)
        if conflicts:
            logger.info(
                "repo.create.duplicate_precheck",
                extra={"model": model_name, "operation": "create", "conflict_fields": sorted(conflicts)},
            )
            raise DuplicateError(
                f"{model_name} already exists for field(s): {', '.join(sorted(conflicts))}",
                fields=sorted(conflicts),
            )

        # 4) DB write with fallback mapping on integrity errors
        start = time.perf_counter()

        async with db_error_handler(self.db, model_name):
            entity = self.model(**kwargs)
            self.db.add(entity)
            await self.db.flush()
            # reload server-generated columns (id, createdAt, updatedAt)
            await self.db.refresh(entity)

        logger.info(
            "repo.create.success",
            extra={
                "model": model_name,
                "operation": "create",
                "id": getattr(entity, "id", None),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """
        Get an entity by its primary key.

        Returns:
            The entity if found, otherwise None

        Raises:
            RepositoryError: If the lookup itself fails.
        """
        try:
            result = await self.db.execute(
                select(self.model).where(self.model.id == entity_id)
            )
            entity = result.scalar_one_or_none()
            logger.debug(f"Retrieved {self.model.__name__} by ID: {entity_id} (found={entity is not None})")
            return entity

        except Exception as e:
            logger.error(f"Error retrieving {self.model.__name__} by ID {entity_id}: {e}")
            raise RepositoryError(f"Failed to retrieve {self.model.__name__}") from e

    async def get_by_id_or_raise(self, entity_id: int) -> ModelType:
        """
        Get an entity by its ID or raise NotFoundError.
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.model.__name__} not found")
        return entity

    async def find_by_field(self, field: str, value: Any) -> ModelType | None:
        """
        Find a single entity by any mapped attribute (exact match).

        Raises:
            RepositoryError: If the field does not exist on the model or query fails
        """
        if not hasattr(self.model, field):
            raise RepositoryError(f"{self.model.__name__} has no field '{field}'")

        try:
            result = await self.db.execute(
                select(self.model).where(getattr(self.model, field) == value)
            )
            return result.scalars().first()

        except Exception as e:
            logger.error(f"Error finding {self.model.__name__} by {field}={value}: {e}")
            raise RepositoryError(f"Failed to find {self.model.__name__}") from e

    async def find_all_by_field_in(self, field: str, values: Iterable[Any]) -> list[ModelType]:
        """
        Find every entity whose `field` equals one of `values`, in primary key order.
        """
        if not hasattr(self.model, field):
            raise RepositoryError(f"{self.model.__name__} has no field '{field}'")

        values = list(values)
        if not values:
            return []

        try:
            result = await self.db.execute(
                select(self.model)
                .where(getattr(self.model, field).in_(values))
                .order_by(self.model.id)
            )
            return list(result.scalars().all())

        except Exception as e:
            logger.error(f"Error finding {self.model.__name__} by {field} in {values}: {e}")
            raise RepositoryError(f"Failed to find {self.model.__name__} entities") from e

    # =================================================================================================================
    # Update
    # =================================================================================================================

    async def update_instance(self, entity: ModelType, **changes: Any) -> ModelType:
        """
        Assign `changes` onto an already loaded entity and persist them.

        `updated_at` is always refreshed, even when `changes` is empty, so a save
        is visible to clients. The entity is reloaded afterwards to pick up the
        database-assigned timestamp.

        Raises:
            InvalidFieldError: unknown attribute names were passed
            RepositoryError / ValidationError / DuplicateError: mapped DB failures
        """
        unknown = find_unknown_model_kwargs(self.model, changes)
        if unknown:
            raise InvalidFieldError(f"Unknown field(s) for {self.model.__name__}: {', '.join(unknown)}", fields=unknown)

        async with db_error_handler(self.db, self.model.__name__):
            for key, value in changes.items():
                setattr(entity, key, value)
            if hasattr(self.model, "updated_at"):
                entity.updated_at = func.now()
            await self.db.flush()
            await self.db.refresh(entity)

        logger.debug(
            "repo.update.success",
            extra={"model": self.model.__name__, "id": getattr(entity, "id", None), "changed_keys": sorted(changes)},
        )
        return entity

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def delete_instance(self, entity: ModelType) -> None:
        """
        Delete an already loaded entity. Dependent rows are removed by the
        database's ON DELETE CASCADE rules.
        """
        entity_id = getattr(entity, "id", None)
        async with db_error_handler(self.db, self.model.__name__):
            await self.db.delete(entity)
            await self.db.flush()

        logger.debug("repo.delete.success", extra={"model": self.model.__name__, "id": entity_id})

    async def delete_by_field_in(self, field: str, values: Iterable[Any]) -> int:
        """
        Delete every row whose `field` is in `values`. Returns the number of rows removed.
        """
        if not hasattr(self.model, field):
            raise RepositoryError(f"{self.model.__name__} has no field '{field}'")

        values = list(values)
        if not values:
            return 0

        async with db_error_handler(self.db, self.model.__name__):
            result = await self.db.execute(
                delete(self.model).where(getattr(self.model, field).in_(values))
            )

        logger.debug(
            "repo.bulk_delete.success",
            extra={"model": self.model.__name__, "field": field, "deleted": result.rowcount},
        )
        return result.rowcount

    # =================================================================================================================
    # Transaction
    # =================================================================================================================

    async def commit(self) -> None:
        """Commit the caller's unit of work; failures are mapped like any other write."""
        async with db_error_handler(self.db, self.model.__name__):
            await self.db.commit()
