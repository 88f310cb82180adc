"""
Insect repository: name lookups and the Insect <-> Tree association used by seeders.
"""

from typing import Iterable
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
import logging

from trees_api.models.insect import Insect
from trees_api.models.tree import Tree
from trees_api.exceptions.mapper import db_error_handler
from .base_repository import BaseRepository, RepositoryError

logger = logging.getLogger(__name__)


class InsectRepository(BaseRepository[Insect]):
    """
    Repository for Insect entity operations.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Insect, db)

    async def create_insect(self, name: str) -> Insect:
        """
        Raises:
            DuplicateError: an insect with this name already exists
        """
        return await self.create(name=name.strip())

    async def get_by_name_with_trees(self, name: str) -> Insect | None:
        """
        Exact-name lookup with the `trees` collection eagerly loaded, so the
        collection can be inspected and modified without lazy IO.
        """
        try:
            query = (
                select(Insect)
                .options(selectinload(Insect.trees))
                .where(Insect.name == name)
            )
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Error retrieving insect by name {name}: {e}")
            raise RepositoryError("Failed to retrieve insect by name") from e

    async def add_trees(self, insect: Insect, trees: Iterable[Tree]) -> int:
        """
        Associate `trees` with `insect`, skipping pairs that already exist.
        `insect.trees` must be loaded (see `get_by_name_with_trees`).

        Returns:
            Number of join rows added
        """
        existing = {tree.id for tree in insect.trees}
        new_trees = [tree for tree in trees if tree.id not in existing]

        async with db_error_handler(self.db, "InsectTree"):
            insect.trees.extend(new_trees)
            await self.db.flush()

        logger.debug(
            "repo.associate.success",
            extra={"insect": insect.name, "added": len(new_trees), "already_present": len(existing)},
        )
        return len(new_trees)

    async def remove_trees(self, insect: Insect, trees: Iterable[Tree]) -> int:
        """
        Remove the associations between `insect` and `trees`. Pairs that do not
        exist are ignored.

        Returns:
            Number of join rows removed
        """
        target_ids = {tree.id for tree in trees}
        to_remove = [tree for tree in insect.trees if tree.id in target_ids]

        async with db_error_handler(self.db, "InsectTree"):
            for tree in to_remove:
                insect.trees.remove(tree)
            await self.db.flush()

        logger.debug("repo.dissociate.success", extra={"insect": insect.name, "removed": len(to_remove)})
        return len(to_remove)
