"""
Translate untrusted list-query input into safe SQLAlchemy clauses.

Only columns named in a resource's allow-lists ever reach the query: unknown
filter keys are dropped and unknown sort keys fall back to the resource default.
Values are always bound parameters.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Mapping

from sqlalchemy.sql.elements import ColumnElement, UnaryExpression

from refdata.config.settings import EngineLimits
from .resource import ResourceSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryOptions:
    conditions: list[ColumnElement]
    order_by: UnaryExpression
    limit: int
    offset: int


def state_predicate(spec: ResourceSpec, deleted: bool) -> ColumnElement:
    deleted_at = spec.model.deleted_at
    return deleted_at.is_not(None) if deleted else deleted_at.is_(None)


def _as_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        # A bare date means its midnight, as the HTTP layer parses it
        return datetime.combine(value, time.min)
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def clamp_limit(requested: int | None, limits: EngineLimits) -> int:
    limit = limits.min_limit if requested is None else requested
    return max(0, min(limit, limits.max_limit))


def clamp_offset(requested: int | None, limits: EngineLimits) -> int:
    offset = limits.default_offset if requested is None else requested
    return max(0, offset)


def build_query_options(
    spec: ResourceSpec,
    filters: Mapping[str, Any] | None,
    limits: EngineLimits,
    *,
    deleted: bool = False,
    sort_by: str | None = None,
    order: str | None = None,
    limit: int | None = None,
    offset: int | None = None,
) -> QueryOptions:
    """
    Build WHERE conditions, ORDER BY and the clamped page window for a list query.

    - The soft-delete state predicate always comes first.
    - Text filters become case-insensitive "contains" matches with LIKE wildcards escaped.
    - Date filters are upper bounds (`column <= value`).
    - Absent, empty or unparseable filter values are skipped. Never raises.
    """
    filters = filters or {}
    conditions: list[ColumnElement] = [state_predicate(spec, deleted)]

    for key, column in spec.text_filters.items():
        value = filters.get(key)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            conditions.append(column.icontains(value, autoescape=True))

    for key, column in spec.date_filters.items():
        bound = _as_datetime(filters.get(key))
        if bound is not None:
            conditions.append(column <= bound)

    sort_column = spec.sort_columns.get(sort_by) if sort_by else None
    if sort_by and sort_column is None:
        logger.debug("query.sort_by_ignored", extra={"resource": spec.plural, "sort_by": sort_by})
    if sort_column is None:
        sort_column = spec.default_sort

    descending = isinstance(order, str) and order.strip().lower() == "desc"
    order_by = sort_column.desc() if descending else sort_column.asc()

    return QueryOptions(
        conditions=conditions,
        order_by=order_by,
        limit=clamp_limit(limit, limits),
        offset=clamp_offset(offset, limits),
    )
