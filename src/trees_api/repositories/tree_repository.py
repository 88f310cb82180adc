"""
Tree repository for handling tree-specific database operations.

Extends BaseRepository with the queries behind the /trees endpoints: the
height-ordered summary listing, the name search and the partial update.
"""

from typing import Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging

from trees_api.models.tree import Tree
from trees_api.validators.request_validators import is_provided
from .base_repository import BaseRepository, RepositoryError

logger = logging.getLogger(__name__)

# Summary rows are ordered tallest first; equal heights keep insertion order
_SUMMARY_ORDER = (Tree.height_ft.desc(), Tree.id.asc())


class TreeRepository(BaseRepository[Tree]):
    """
    Repository for Tree entity operations.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Tree, db)

    # =================================================================================================================
    # Create Operations
    # =================================================================================================================

    async def create_tree(
        self,
        name: str | None,
        location: str | None,
        height: float | None,
        size: float | None,
    ) -> Tree:
        """
        Create a tree from the short field names used by request bodies.

        `None` values are passed through so the base repository reports every
        missing column at once.

        Raises:
            ValidationError: one or more required columns are missing
            RepositoryError: any other database failure
        """
        logger.info("Creating new tree", extra={"tree": name})

        return await self.create(
            tree=name,
            location=location,
            height_ft=height,
            ground_circumference_ft=size,
        )

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def list_summaries(self) -> list[Tree]:
        """
        Every tree, tallest first. Only `height_ft`, `tree` and `id` are meant to be read
        from the result (see `TreeSummary`).
        """
        try:
            result = await self.db.execute(select(Tree).order_by(*_SUMMARY_ORDER))
            trees = list(result.scalars().all())
            logger.debug(f"Listed {len(trees)} trees")
            return trees
        except Exception as e:
            logger.error(f"Error listing trees: {e}")
            raise RepositoryError("Failed to list trees") from e

    async def search_by_name(self, value: str) -> list[Tree]:
        """
        Trees whose name contains `value`, case-insensitively, tallest first.

        `value` is used as-is inside `%value%`, so `%` and `_` keep their
        LIKE meaning.
        """
        try:
            query = (
                select(Tree)
                .where(Tree.tree.ilike(f"%{value}%"))
                .order_by(*_SUMMARY_ORDER)
            )
            result = await self.db.execute(query)
            trees = list(result.scalars().all())
            logger.debug(f"Search '{value}' matched {len(trees)} trees")
            return trees
        except Exception as e:
            logger.error(f"Error searching trees by name {value!r}: {e}")
            raise RepositoryError("Failed to search trees") from e

    # =================================================================================================================
    # Update Operations
    # =================================================================================================================

    async def apply_update(
        self,
        tree: Tree,
        *,
        name: Any = None,
        location: Any = None,
        height: Any = None,
        size: Any = None,
    ) -> Tree:
        """
        Overwrite only the fields whose incoming value is provided.

        None, "" and numeric zero leave the stored value untouched; `updated_at`
        is refreshed either way.
        """
        incoming = {
            "tree": name,
            "location": location,
            "height_ft": height,
            "ground_circumference_ft": size,
        }
        changes = {key: value for key, value in incoming.items() if is_provided(value)}

        logger.info(
            "Updating tree",
            extra={"id": tree.id, "changed_keys": sorted(changes), "skipped_keys": sorted(set(incoming) - set(changes))},
        )
        return await self.update_instance(tree, **changes)
