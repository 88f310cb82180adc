"""Sample insects. Names are unique, so `up` skips the ones already present."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from trees_api.repositories import InsectRepository

logger = logging.getLogger(__name__)

INSECTS = [
    "Western Pygmy Blue Butterfly",
    "Patu Digua Spider",
]


async def up(session: AsyncSession) -> int:
    repo = InsectRepository(session)
    created = 0
    for name in INSECTS:
        if await repo.find_by_field("name", name) is not None:
            logger.debug("Insect already seeded", extra={"insect": name})
            continue
        await repo.create_insect(name)
        created += 1
    return created


async def down(session: AsyncSession) -> int:
    return await InsectRepository(session).delete_by_field_in("name", INSECTS)
