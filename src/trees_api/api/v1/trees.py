"""
/trees endpoints.

Handlers raise `ApiError` subclasses and leave the HTTP error response to the
handlers registered in `error_handlers`. The one exception is the update of a
missing tree, which answers 400 directly and returns.
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from trees_api.core.dependencies import get_tree_repository
from trees_api.exceptions import NotFoundError, RepositoryError, TreeNotFound, TreeRequestError, describe_error
from trees_api.repositories import TreeRepository
from trees_api.schemas import TreeCreate, TreeUpdate, TreeSummary, TreeRead, TreeEnvelope
from trees_api.validators.request_validators import parse_path_id, ids_match

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trees", tags=["trees"])


@router.get("", response_model=list[TreeSummary])
async def list_trees(repo: TreeRepository = Depends(get_tree_repository)):
    """All trees as `{heightFt, tree, id}`, tallest first."""
    return await repo.list_summaries()


@router.get("/search/{value}", response_model=list[TreeSummary])
async def search_trees(value: str, repo: TreeRepository = Depends(get_tree_repository)):
    """Trees whose name contains `value` (case-insensitive), tallest first."""
    return await repo.search_by_name(value)


@router.get("/{tree_id}", response_model=TreeRead)
async def get_tree(tree_id: str, repo: TreeRepository = Depends(get_tree_repository)):
    message = f"Could not find tree {tree_id}"
    pk = parse_path_id(tree_id)

    if pk is None:
        raise TreeNotFound(message, "Tree not found")

    try:
        return await repo.get_by_id_or_raise(pk)
    except NotFoundError as exc:
        raise TreeNotFound(message, "Tree not found") from exc
    except RepositoryError as exc:
        raise TreeRequestError(message, describe_error(exc)) from exc


@router.post("", response_model=TreeEnvelope)
async def create_tree(payload: TreeCreate | None = None, repo: TreeRepository = Depends(get_tree_repository)):
    payload = payload or TreeCreate()

    try:
        tree = await repo.create_tree(
            name=payload.name,
            location=payload.location,
            height=payload.height,
            size=payload.size,
        )
        await repo.commit()
    except RepositoryError as exc:
        raise TreeRequestError("Could not create new tree", describe_error(exc)) from exc

    return TreeEnvelope(message="Successfully created new tree", data=TreeRead.model_validate(tree))


@router.delete("/{tree_id}", response_model=TreeEnvelope, response_model_exclude_none=True)
async def delete_tree(tree_id: str, repo: TreeRepository = Depends(get_tree_repository)):
    message = f"Could not remove tree {tree_id}"
    pk = parse_path_id(tree_id)

    if pk is None:
        raise TreeNotFound(message, "Tree not found")

    try:
        tree = await repo.get_by_id_or_raise(pk)
        await repo.delete_instance(tree)
        await repo.commit()
    except NotFoundError as exc:
        raise TreeNotFound(message, "Tree not found") from exc
    except RepositoryError as exc:
        # storage failure, not a missing row
        raise TreeRequestError(message, describe_error(exc)) from exc

    logger.info("Removed tree", extra={"id": pk})
    return TreeEnvelope(message=f"Successfully removed tree {tree_id}")


@router.put("/{tree_id}", response_model=TreeEnvelope)
async def update_tree(tree_id: str, payload: TreeUpdate | None = None,
                      repo: TreeRepository = Depends(get_tree_repository)):
    """
    Partial update. The body `id` must equal the path id; only provided
    (non-empty, non-zero) values overwrite stored ones.
    """
    payload = payload or TreeUpdate()
    pk = parse_path_id(tree_id)

    if not ids_match(pk, payload.id):
        raise TreeRequestError("Could not update tree", f"{tree_id} does not match {payload.id}")

    try:
        tree = await repo.get_by_id(pk)
        if tree is None:
            logger.info("Update of missing tree", extra={"id": pk})
            return JSONResponse(
                status_code=400,
                content=TreeNotFound(f"Could not update tree {tree_id}", "Tree not found").to_payload(),
            )

        tree = await repo.apply_update(
            tree,
            name=payload.name,
            location=payload.location,
            height=payload.height,
            size=payload.size,
        )
        await repo.commit()
    except RepositoryError as exc:
        raise TreeRequestError("Could not update tree", describe_error(exc)) from exc

    return TreeEnvelope(message="Successfully updated tree", data=TreeRead.model_validate(tree))
