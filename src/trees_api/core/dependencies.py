from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from trees_api.database.session import get_async_session
from trees_api.repositories import TreeRepository


async def get_tree_repository(db: AsyncSession = Depends(get_async_session)) -> TreeRepository:
    # One repository per request, bound to the request's session
    return TreeRepository(db)
