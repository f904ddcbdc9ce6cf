"""
Build the uniform set of CRUD routes for one resource.

Every resource exposes the same eleven endpoints; only the repository and the
request models differ, so routers are produced from a `ResourceRoutes` entry
instead of being written out eight times.

Route handlers own the unit of work: they commit after a successful mutation.
If anything fails, nothing is committed and the session rolls back on close.
"""
from dataclasses import dataclass
from typing import Any, Callable

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from refdata.config import EngineLimits, get_engine_limits
from refdata.database.session import get_async_session
from refdata.exceptions.base import InvalidArgumentError
from refdata.exceptions.mapper import db_error_handler
from refdata.repositories.base_repository import BaseRepository
from refdata.schemas.common import BulkReport, CamelModel, CreatedRef, Page, PaginationQuery


@dataclass(frozen=True)
class ResourceRoutes:
    prefix: str                                    # "/cities"
    repository: Callable[[AsyncSession, EngineLimits], BaseRepository]
    create_model: type[CamelModel]
    update_model: type[CamelModel]
    filter_model: type[PaginationQuery]


def _ids_from_body(payload: Any = Body(default=None)) -> list[Any] | None:
    """Accept either {"ids": [...]} or a bare JSON array."""
    if isinstance(payload, dict):
        payload = payload.get("ids")
    if payload is None or isinstance(payload, list):
        return payload
    raise InvalidArgumentError("IDs array is required", fields=["ids"])


async def _commit(db: AsyncSession, entity: str) -> None:
    # deferred constraint checks surface here, so commit goes through the same mapping
    async with db_error_handler(db, entity):
        await db.commit()


def build_router(resource: ResourceRoutes) -> APIRouter:
    router = APIRouter(prefix=resource.prefix, tags=[resource.prefix.strip("/")])

    CreateModel = resource.create_model
    UpdateModel = resource.update_model
    FilterModel = resource.filter_model

    def get_repository(
        db: AsyncSession = Depends(get_async_session),
        limits: EngineLimits = Depends(get_engine_limits),
    ) -> BaseRepository:
        return resource.repository(db, limits)

    def list_query(request: Request) -> PaginationQuery:
        try:
            return FilterModel.model_validate(dict(request.query_params))
        except ValidationError as exc:
            raise RequestValidationError(exc.errors()) from exc

    # --- collection routes (static paths first so "/{entity_id}" never shadows them) ---

    @router.post("", status_code=status.HTTP_201_CREATED, response_model=CreatedRef)
    async def create(payload: CreateModel, repo: BaseRepository = Depends(get_repository)):
        created = await repo.create(**payload.model_dump(mode="json"))
        await _commit(repo.db, repo.entity)
        return created

    @router.get("", response_model=Page)
    async def find_all(query: PaginationQuery = Depends(list_query), repo: BaseRepository = Depends(get_repository)):
        return await repo.find_all(
            query.filters(),
            deleted=query.deleted,
            sort_by=query.sort_by,
            order=query.order,
            limit=query.limit,
            offset=query.offset,
        )

    @router.post("/create", status_code=status.HTTP_201_CREATED, response_model=BulkReport)
    async def bulk_create(payload: list[CreateModel], repo: BaseRepository = Depends(get_repository)):
        report = await repo.bulk_create([item.model_dump(mode="json") for item in payload])
        await _commit(repo.db, repo.entity)
        return report

    @router.delete("/remove", response_model=BulkReport)
    async def bulk_remove(ids: list[Any] | None = Depends(_ids_from_body), repo: BaseRepository = Depends(get_repository)):
        report = await repo.bulk_remove(ids)
        await _commit(repo.db, repo.entity)
        return report

    @router.patch("/restore", response_model=BulkReport)
    async def bulk_restore(ids: list[Any] | None = Depends(_ids_from_body), repo: BaseRepository = Depends(get_repository)):
        report = await repo.bulk_restore(ids)
        await _commit(repo.db, repo.entity)
        return report

    @router.delete("/delete", response_model=BulkReport)
    async def bulk_delete(ids: list[Any] | None = Depends(_ids_from_body), repo: BaseRepository = Depends(get_repository)):
        report = await repo.bulk_delete(ids)
        await _commit(repo.db, repo.entity)
        return report

    # --- single-entity routes ---

    @router.patch("/restore/{entity_id}")
    async def restore(entity_id: str, repo: BaseRepository = Depends(get_repository)):
        row = await repo.restore(entity_id)
        await _commit(repo.db, repo.entity)
        return row

    @router.delete("/delete/{entity_id}")
    async def hard_delete(entity_id: str, repo: BaseRepository = Depends(get_repository)):
        row = await repo.delete(entity_id)
        await _commit(repo.db, repo.entity)
        return row

    @router.get("/{entity_id}")
    async def find_one(entity_id: str, delete: bool = False, repo: BaseRepository = Depends(get_repository)):
        # `delete=true` reads the soft-deleted copy
        return await repo.find_one(entity_id, deleted=delete)

    @router.patch("/{entity_id}")
    async def update(entity_id: str, payload: UpdateModel, repo: BaseRepository = Depends(get_repository)):
        row = await repo.update(entity_id, **payload.model_dump(mode="json", exclude_unset=True))
        await _commit(repo.db, repo.entity)
        return row

    @router.delete("/{entity_id}")
    async def remove(entity_id: str, repo: BaseRepository = Depends(get_repository)):
        row = await repo.remove(entity_id)
        await _commit(repo.db, repo.entity)
        return row

    return router
