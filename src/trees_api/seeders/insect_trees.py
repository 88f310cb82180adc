"""
Insect <-> Tree associations.

Each record names an insect and the trees it lives on. `up` looks the insect up
by exact name and the trees by name-in-set, then associates the pairs that are
not associated yet; `down` removes exactly those pairs.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from trees_api.repositories import InsectRepository, TreeRepository

logger = logging.getLogger(__name__)

INSECT_TREES = [
    {
        "insect": "Western Pygmy Blue Butterfly",
        "trees": ["General Sherman", "General Grant", "Lincoln", "Stagg"],
    },
    {
        "insect": "Patu Digua Spider",
        "trees": ["Stagg"],
    },
]


async def _resolve(session: AsyncSession, record: dict):
    insect = await InsectRepository(session).get_by_name_with_trees(record["insect"])
    if insect is None:
        logger.warning("Insect not found, skipping its associations", extra={"insect": record["insect"]})
        return None, []
    trees = await TreeRepository(session).find_all_by_field_in("tree", record["trees"])
    return insect, trees


async def up(session: AsyncSession) -> int:
    repo = InsectRepository(session)
    added = 0
    for record in INSECT_TREES:
        insect, trees = await _resolve(session, record)
        if insect is not None:
            added += await repo.add_trees(insect, trees)
    return added


async def down(session: AsyncSession) -> int:
    repo = InsectRepository(session)
    removed = 0
    for record in INSECT_TREES:
        insect, trees = await _resolve(session, record)
        if insect is not None:
            removed += await repo.remove_trees(insect, trees)
    return removed
