"""
Per-resource configuration consumed by the generic repository.

A `ResourceSpec` is everything that differs between two resources: the table,
how a list row is projected and shaped, which filters and sort keys a client may
use, and which tables are joined to resolve display names. The CRUD, pagination
and batching logic itself lives once in `BaseRepository`.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from pydantic.alias_generators import to_camel
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.selectable import FromClause

from refdata.database.base import Base
from refdata.validators.identifiers import IdKind

# Columns that no client payload may set directly
MANAGED_COLUMNS = frozenset({"id", "created_at", "updated_at", "deleted_at"})


@dataclass(frozen=True)
class JoinSpec:
    """A LEFT OUTER JOIN: a missing related row yields NULLs, never drops the base row."""
    target: Any  # mapped class or FromClause
    onclause: ColumnElement


RowMapper = Callable[[Mapping[str, Any]], dict[str, Any]]


@dataclass(frozen=True)
class ResourceSpec:
    model: type[Base]
    entity: str                                   # "City"; used in error messages
    plural: str                                   # "cities"; used in bulk reports
    list_columns: Mapping[str, ColumnElement]     # output key -> column, in output order
    sort_columns: Mapping[str, ColumnElement]     # allow-list: client sort key -> column
    default_sort: ColumnElement
    text_filters: Mapping[str, ColumnElement] = field(default_factory=dict)
    date_filters: Mapping[str, ColumnElement] = field(default_factory=dict)
    joins: tuple[JoinSpec, ...] = ()
    row_mapper: RowMapper | None = None
    id_kind: IdKind = IdKind.INTEGER
    hidden_fields: frozenset[str] = frozenset()   # never selected by read paths

    def __post_init__(self):
        if not self.date_filters:
            object.__setattr__(self, "date_filters", {"createdAt": self.model.created_at})

    @property
    def table(self) -> FromClause:
        return self.model.__table__

    @property
    def id_column(self) -> ColumnElement:
        return self.model.id

    def detail_columns(self) -> list[ColumnElement]:
        """Every column of the table except hidden ones, labelled with camelCase keys."""
        return [
            column.label(to_camel(column.key))
            for column in self.table.columns
            if column.key not in self.hidden_fields
        ]

    def writable_fields(self) -> set[str]:
        return {column.key for column in self.table.columns} - MANAGED_COLUMNS

    def map_row(self, row: Mapping[str, Any]) -> dict[str, Any]:
        values = {key: row[key] for key in self.list_columns}
        if self.row_mapper is not None:
            return self.row_mapper(values)
        return values
