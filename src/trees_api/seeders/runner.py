"""
Seed runner.

    python -m trees_api.seeders up      # trees, insects, insect_trees
    python -m trees_api.seeders down    # same seeds, reverse order
    trees-seed up --only trees

Each seed runs in its own transaction and is committed before the next one.
"""
import argparse
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from trees_api.config import get_settings
from trees_api.core.logging import setup_logging
from . import trees, insects, insect_trees

logger = logging.getLogger(__name__)

SEEDS = {
    "trees": trees,
    "insects": insects,
    "insect_trees": insect_trees,
}


async def run_seeds(direction: str, session_maker: async_sessionmaker[AsyncSession],
                    only: list[str] | None = None) -> dict[str, int]:
    """
    Apply (`up`) or revert (`down`) the seeds and return rows touched per seed.
    """
    if direction not in ("up", "down"):
        raise ValueError(f"direction must be 'up' or 'down', got {direction!r}")

    names = [name for name in SEEDS if not only or name in only]
    if direction == "down":
        names.reverse()

    results: dict[str, int] = {}
    for name in names:
        step = getattr(SEEDS[name], direction)
        async with session_maker() as session:
            try:
                results[name] = await step(session)
                await session.commit()
            except Exception:
                await session.rollback()
                logger.exception("Seed failed", extra={"seed": name, "direction": direction})
                raise
        logger.info("Seed applied", extra={"seed": name, "direction": direction, "rows": results[name]})

    return results


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="trees-seed", description="Insert or remove the sample data.")
    parser.add_argument("direction", choices=["up", "down"])
    parser.add_argument("--only", nargs="+", choices=list(SEEDS), help="run only these seeds")
    args = parser.parse_args(argv)

    setup_logging(get_settings())

    # the session module builds its engine from settings on import
    from trees_api.database.session import AsyncSessionMaker, engine

    async def _run():
        try:
            return await run_seeds(args.direction, AsyncSessionMaker, args.only)
        finally:
            await engine.dispose()

    asyncio.run(_run())
