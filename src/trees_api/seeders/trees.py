"""Sample trees."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from trees_api.repositories import TreeRepository

logger = logging.getLogger(__name__)

TREES = [
    {"tree": "General Sherman", "location": "Sequoia National Park", "height_ft": 274.9, "ground_circumference_ft": 102.6},
    {"tree": "General Grant", "location": "Kings Canyon National Park", "height_ft": 268.1, "ground_circumference_ft": 107.5},
    {"tree": "President", "location": "Sequoia National Park", "height_ft": 240.9, "ground_circumference_ft": 93.0},
    {"tree": "Lincoln", "location": "Sequoia National Park", "height_ft": 255.8, "ground_circumference_ft": 98.3},
    {"tree": "Stagg", "location": "Private Land", "height_ft": 243.0, "ground_circumference_ft": 109.0},
]


async def up(session: AsyncSession) -> int:
    repo = TreeRepository(session)
    created = 0
    for record in TREES:
        if await repo.find_by_field("tree", record["tree"]) is not None:
            logger.debug("Tree already seeded", extra={"tree": record["tree"]})
            continue
        await repo.create(**record)
        created += 1
    return created


async def down(session: AsyncSession) -> int:
    return await TreeRepository(session).delete_by_field_in("tree", [record["tree"] for record in TREES])
