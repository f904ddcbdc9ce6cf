"""
Base repository class providing the CRUD engine shared by every resource.

One generic implementation handles list pagination, single-entity access,
single and bulk mutations, and soft-delete state transitions. Resource
repositories subclass it with a `ResourceSpec` describing their table, columns,
filters, sort keys and joins, and override the `_prepare_values` hook when a
payload needs transforming before it is written (users hash passwords there).

Repositories never commit. Every statement runs on the injected session, so a
bulk call and all of its batches share the caller's transaction; the caller
(the HTTP layer, or a test) decides when to commit.
"""
import json
import time
import logging
from typing import Any, Generic, Iterable, Iterator, Sequence, TypeVar

from sqlalchemy import select, update, delete, insert, func
from sqlalchemy.ext.asyncio import AsyncSession

from refdata.config.settings import EngineLimits
from refdata.database.base import Base, utcnow
from refdata.exceptions.base import InvalidArgumentError, NotFoundError
from refdata.exceptions.mapper import db_error_handler
from refdata.validators.identifiers import coerce_id, coerce_ids
from .query_builder import build_query_options, state_predicate
from .resource import ResourceSpec

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

# Setup logging
logger = logging.getLogger(__name__)


def _not_found_message(entity: str, criteria: dict[str, Any]) -> str:
    return f"{entity} with {json.dumps(criteria, separators=(',', ':'), default=str)} not found"


class BaseRepository(Generic[ModelType]):
    """
    Generic resource repository.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, spec: ResourceSpec, db: AsyncSession, limits: EngineLimits):
        """
        Args:
            spec: The resource configuration (table, columns, filters, sorts, joins)
            db: The async database session, usually injected by FastAPI
            limits: Pagination and batching limits, resolved once at startup
        """
        self.spec = spec
        self.model: type[ModelType] = spec.model
        self.db = db
        self.limits = limits

    @property
    def entity(self) -> str:
        return self.spec.entity

    @property
    def plural(self) -> str:
        return self.spec.plural

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    async def _prepare_values(self, values: dict[str, Any]) -> dict[str, Any]:
        """
        Transform a validated payload before it is written. Identity by default.

        Overrides doing CPU-bound work push it off the event loop.
        """
        return values

    def _check_fields(self, values: dict[str, Any], operation: str) -> None:
        unknown = sorted(set(values) - self.spec.writable_fields())
        if unknown:
            logger.info(
                f"repo.{operation}.invalid_fields",
                extra={"model": self.entity, "operation": operation, "invalid_fields": unknown},
            )
            raise InvalidArgumentError(f"Unknown field(s) for {self.entity}: {', '.join(unknown)}", fields=unknown)

    def _chunks(self, items: Sequence[Any]) -> Iterator[Sequence[Any]]:
        size = self.limits.batch_size
        for start in range(0, len(items), size):
            yield items[start:start + size]

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def find_all(
        self,
        filters: dict[str, Any] | None = None,
        *,
        deleted: bool = False,
        sort_by: str | None = None,
        order: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        """
        Return one page of rows plus the total number of rows matching the filters.

        The total comes from a `COUNT(*) OVER ()` window on the same query, so it is
        read from the first row; an empty page (including an offset past the end)
        reports a count of 0.

        Returns:
            {"data": [...], "limit": int, "offset": int, "count": int}
        """
        options = build_query_options(
            self.spec, filters, self.limits,
            deleted=deleted, sort_by=sort_by, order=order, limit=limit, offset=offset,
        )

        stmt = select(
            *[column.label(key) for key, column in self.spec.list_columns.items()],
            func.count().over().label("total_count"),
        ).select_from(self.model)
        for join in self.spec.joins:
            stmt = stmt.outerjoin(join.target, join.onclause)
        stmt = (
            stmt.where(*options.conditions)
            .order_by(options.order_by)
            .limit(options.limit)
            .offset(options.offset)
        )

        start = time.perf_counter()
        async with db_error_handler(self.db, self.entity):
            rows = (await self.db.execute(stmt)).mappings().all()

        count = int(rows[0]["total_count"] or 0) if rows else 0
        logger.debug(
            "repo.find_all.success",
            extra={
                "model": self.entity,
                "operation": "find_all",
                "returned": len(rows),
                "count": count,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return {
            "data": [self.spec.map_row(row) for row in rows],
            "limit": options.limit,
            "offset": options.offset,
            "count": count,
        }

    async def find_one(self, entity_id: Any, deleted: bool = False) -> dict[str, Any]:
        """
        Get one entity by id in the requested soft-delete state.

        Raises:
            InvalidArgumentError: If the id is not a valid identifier for this resource.
            NotFoundError: If no row with that id is in the requested state.
        """
        entity_id = coerce_id(entity_id, self.spec.id_kind, self.entity)

        stmt = select(*self.spec.detail_columns()).where(
            self.spec.id_column == entity_id,
            state_predicate(self.spec, deleted),
        )
        async with db_error_handler(self.db, self.entity):
            row = (await self.db.execute(stmt)).mappings().one_or_none()

        if row is None:
            raise NotFoundError(_not_found_message(self.entity, {"id": entity_id}), detail=[entity_id])
        return dict(row)

    # ------------------------------------------------------------------
    # Single-entity writes
    # ------------------------------------------------------------------

    async def create(self, **kwargs) -> dict[str, Any]:
        """
        Insert one entity. Logging:
        - DEBUG: start event with the provided keys (not values).
        - INFO: success event with the new id and duration_ms.

        Returns:
            {"id": <new id>}
        """
        logger.debug(
            "repo.create.start",
            extra={"model": self.entity, "operation": "create", "provided_keys": sorted(kwargs)},
        )
        self._check_fields(kwargs, "create")
        values = await self._prepare_values(dict(kwargs))

        start = time.perf_counter()
        async with db_error_handler(self.db, self.entity):
            result = await self.db.execute(
                insert(self.model).values(**values, updated_at=utcnow()).returning(self.spec.id_column)
            )
            new_id = result.scalar_one()

        logger.info(
            "repo.create.success",
            extra={
                "model": self.entity,
                "operation": "create",
                "id": str(new_id),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return {"id": new_id}

    async def update(self, entity_id: Any, **kwargs) -> dict[str, Any]:
        """
        Update an active entity and return its detail row.

        Fields passed as None are ignored; an update with nothing left to write
        returns the current row unchanged.

        Raises:
            InvalidArgumentError: Invalid id or unknown field names.
            NotFoundError: No active row with that id.
        """
        entity_id = coerce_id(entity_id, self.spec.id_kind, self.entity)
        self._check_fields(kwargs, "update")

        update_data = {k: v for k, v in kwargs.items() if v is not None}
        if not update_data:
            logger.info("repo.update.empty_payload", extra={"model": self.entity, "operation": "update"})
            return await self.find_one(entity_id)

        values = await self._prepare_values(update_data)
        stmt = (
            update(self.model)
            .where(self.spec.id_column == entity_id, state_predicate(self.spec, False))
            .values(**values, updated_at=utcnow())
            .returning(*self.spec.detail_columns())
            .execution_options(synchronize_session=False)
        )
        row = await self._execute_single(stmt, entity_id, "update")
        logger.info(
            "repo.update.success",
            extra={"model": self.entity, "operation": "update", "id": str(entity_id),
                   "updated_fields": sorted(update_data)},
        )
        return row

    async def remove(self, entity_id: Any) -> dict[str, Any]:
        """Soft-delete one active entity and return its detail row."""
        entity_id = coerce_id(entity_id, self.spec.id_kind, self.entity)
        now = utcnow()
        stmt = (
            update(self.model)
            .where(self.spec.id_column == entity_id, state_predicate(self.spec, False))
            .values(deleted_at=now, updated_at=now)
            .returning(*self.spec.detail_columns())
            .execution_options(synchronize_session=False)
        )
        return await self._execute_single(stmt, entity_id, "remove")

    async def restore(self, entity_id: Any) -> dict[str, Any]:
        """Restore one soft-deleted entity and return its detail row."""
        entity_id = coerce_id(entity_id, self.spec.id_kind, self.entity)
        stmt = (
            update(self.model)
            .where(self.spec.id_column == entity_id, state_predicate(self.spec, True))
            .values(deleted_at=None, updated_at=utcnow())
            .returning(*self.spec.detail_columns())
            .execution_options(synchronize_session=False)
        )
        return await self._execute_single(stmt, entity_id, "restore")

    async def delete(self, entity_id: Any) -> dict[str, Any]:
        """Permanently delete one soft-deleted entity and return the removed row."""
        entity_id = coerce_id(entity_id, self.spec.id_kind, self.entity)
        stmt = (
            delete(self.model)
            .where(self.spec.id_column == entity_id, state_predicate(self.spec, True))
            .returning(*self.spec.detail_columns())
            .execution_options(synchronize_session=False)
        )
        return await self._execute_single(stmt, entity_id, "delete")

    async def _execute_single(self, stmt, entity_id: Any, operation: str) -> dict[str, Any]:
        async with db_error_handler(self.db, self.entity):
            row = (await self.db.execute(stmt)).mappings().one_or_none()

        if row is None:
            logger.info(
                f"repo.{operation}.not_found",
                extra={"model": self.entity, "operation": operation, "id": str(entity_id)},
            )
            raise NotFoundError(_not_found_message(self.entity, {"id": entity_id}), detail=[entity_id])
        logger.debug(f"repo.{operation}.success", extra={"model": self.entity, "id": str(entity_id)})
        return dict(row)

    # ------------------------------------------------------------------
    # Bulk writes
    # ------------------------------------------------------------------

    async def _validate_ids(self, ids: Iterable[Any] | None, deleted: bool = False) -> list[Any]:
        """
        Coerce and de-duplicate `ids`, then require at least one of them to be in
        the expected state.

        The full requested list is returned even when only some ids match; the
        mutating statements repeat the state predicate, so ids in the wrong state
        (or missing) are simply not affected.

        Raises:
            InvalidArgumentError: Empty list or any invalid id.
            NotFoundError: None of the ids exist in the expected state.
        """
        id_list = coerce_ids(ids, self.spec.id_kind, self.entity)

        stmt = select(self.spec.id_column).where(
            self.spec.id_column.in_(id_list),
            state_predicate(self.spec, deleted),
        )
        async with db_error_handler(self.db, self.entity):
            existing = (await self.db.execute(stmt)).scalars().all()

        if not existing:
            logger.info(
                "repo.validate_ids.none_found",
                extra={"model": self.entity, "requested": len(id_list), "deleted": deleted},
            )
            raise NotFoundError(
                _not_found_message(self.entity, {"id": ", ".join(str(i) for i in id_list)}),
                fields=["ids"],
                detail=id_list,
            )
        return id_list

    async def _run_batches(self, ids: list[Any], build_stmt, operation: str) -> list[Any]:
        """
        Execute `build_stmt(chunk)` for each chunk of `ids`, strictly one after the
        other, and collect the returned ids in request order.

        Any failure rolls back the session, discarding every earlier batch too.
        """
        position = {value: index for index, value in enumerate(ids)}
        affected: list[Any] = []

        start = time.perf_counter()
        async with db_error_handler(self.db, self.entity):
            for batch_no, chunk in enumerate(self._chunks(ids), start=1):
                result = await self.db.execute(build_stmt(chunk))
                returned = result.scalars().all()
                affected.extend(sorted(returned, key=lambda value: position.get(value, len(position))))
                logger.debug(
                    f"repo.{operation}.batch",
                    extra={"model": self.entity, "batch": batch_no, "size": len(chunk), "affected": len(returned)},
                )

        logger.info(
            f"repo.{operation}.success",
            extra={
                "model": self.entity,
                "operation": operation,
                "requested": len(ids),
                "affected": len(affected),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return affected

    async def bulk_remove(self, ids: Iterable[Any] | None) -> dict[str, Any]:
        id_list = await self._validate_ids(ids, deleted=False)

        def build(chunk):
            now = utcnow()
            return (
                update(self.model)
                .where(self.spec.id_column.in_(chunk), state_predicate(self.spec, False))
                .values(deleted_at=now, updated_at=now)
                .returning(self.spec.id_column)
                .execution_options(synchronize_session=False)
            )

        affected = await self._run_batches(id_list, build, "bulk_remove")
        return {"message": f"Soft-deleted {len(affected)} {self.plural} in batches", "affected_ids": affected}

    async def bulk_restore(self, ids: Iterable[Any] | None) -> dict[str, Any]:
        id_list = await self._validate_ids(ids, deleted=True)

        def build(chunk):
            return (
                update(self.model)
                .where(self.spec.id_column.in_(chunk), state_predicate(self.spec, True))
                .values(deleted_at=None, updated_at=utcnow())
                .returning(self.spec.id_column)
                .execution_options(synchronize_session=False)
            )

        affected = await self._run_batches(id_list, build, "bulk_restore")
        return {"message": f"Restored {len(affected)} {self.plural} in batches", "affected_ids": affected}

    async def bulk_delete(self, ids: Iterable[Any] | None) -> dict[str, Any]:
        """Permanently delete soft-deleted rows. Active rows in `ids` are left alone."""
        id_list = await self._validate_ids(ids, deleted=True)

        def build(chunk):
            return (
                delete(self.model)
                .where(self.spec.id_column.in_(chunk), state_predicate(self.spec, True))
                .returning(self.spec.id_column)
                .execution_options(synchronize_session=False)
            )

        affected = await self._run_batches(id_list, build, "bulk_delete")
        return {"message": f"Permanently deleted {len(affected)} {self.plural} in batches.", "affected_ids": affected}

    async def bulk_create(self, payloads: Sequence[dict[str, Any]] | None) -> dict[str, Any]:
        """
        Insert many entities in chunks of `batch_size` inside the caller's transaction.

        Raises:
            InvalidArgumentError: Empty payload list or unknown field names.
        """
        if not payloads:
            raise InvalidArgumentError(f"No {self.plural} provided for mass create")

        now = utcnow()
        rows = []
        for payload in payloads:
            self._check_fields(payload, "bulk_create")
            rows.append({**await self._prepare_values(dict(payload)), "updated_at": now})

        created: list[Any] = []
        start = time.perf_counter()
        async with db_error_handler(self.db, self.entity):
            for chunk in self._chunks(rows):
                result = await self.db.execute(
                    insert(self.model).returning(self.spec.id_column, sort_by_parameter_order=True),
                    list(chunk),
                )
                created.extend(result.scalars().all())

        logger.info(
            "repo.bulk_create.success",
            extra={
                "model": self.entity,
                "operation": "bulk_create",
                "created_count": len(created),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return {"message": f"Successfully created {len(created)} {self.plural}", "affected_ids": created}
