"""
Shared request/response models.

Everything on the wire is camelCase; Python code uses snake_case field names.
`populate_by_name` lets repositories and tests build models with either.
"""
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class PaginationQuery(CamelModel):
    """Query parameters every list endpoint accepts."""
    model_config = ConfigDict(extra="ignore")

    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)
    sort_by: str | None = None
    # "desc" (any case) sorts descending; anything else ascending
    order: str | None = None
    deleted: bool = False
    # upper bound: rows created at or before this instant
    created_at: datetime | None = None

    def filters(self) -> dict[str, Any]:
        """The filter values keyed the way resource filter maps expect (camelCase)."""
        return self.model_dump(
            by_alias=True,
            exclude_none=True,
            exclude={"limit", "offset", "sort_by", "order", "deleted"},
        )


class Page(CamelModel):
    data: list[dict[str, Any]]
    limit: int
    offset: int
    count: int


class CreatedRef(CamelModel):
    id: int | UUID


class BulkReport(CamelModel):
    message: str
    affected_ids: list[int | UUID]

