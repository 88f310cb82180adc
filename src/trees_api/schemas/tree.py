"""
Pydantic schemas for the /trees resource.

Request bodies use the short field names clients send (`name`, `height`, `size`);
responses use the camelCase column names (`heightFt`, `groundCircumferenceFt`).
"""
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# --- Request bodies ---

class TreeCreate(BaseModel):
    """
    POST body. Every field is optional here; missing required columns are
    rejected by the repository with one message per column.
    """
    name: str | None = None
    location: str | None = None
    height: float | None = None
    size: float | None = None


class TreeUpdate(TreeCreate):
    """
    PUT body. `id` is kept exactly as sent so a string or boolean id is
    reported as a mismatch instead of being coerced.
    """
    id: Any = None


# --- Responses ---

class _CamelModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TreeSummary(_CamelModel):
    """List/search projection: `{heightFt, tree, id}`."""
    height_ft: float
    tree: str
    id: int


class TreeRead(_CamelModel):
    id: int
    tree: str
    location: str
    height_ft: float
    ground_circumference_ft: float
    created_at: datetime
    updated_at: datetime


class TreeEnvelope(BaseModel):
    """`{status, message, data}` wrapper for successful mutations."""
    status: Literal["success"] = "success"
    message: str
    data: TreeRead | None = None
