"""
Identifier coercion helpers shared by every resource repository.

Integer-keyed resources accept ints and numeric strings; UUID-keyed resources
(users) accept UUID instances and their string forms. Anything else is reported
as an InvalidArgumentError before a query is built.
"""
import math
from enum import Enum
from typing import Any, Iterable
from uuid import UUID

from refdata.exceptions.base import InvalidArgumentError


class IdKind(str, Enum):
    INTEGER = "integer"
    UUID = "uuid"


def coerce_int_id(value: Any) -> int | None:
    """Return `value` as a positive int, or None when it is not a usable id."""
    # bool is an int subclass; True must not silently become id 1
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if math.isnan(value) or not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, str):
        value = value.strip()
        if not value.lstrip("-").isdigit():
            return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def coerce_uuid_id(value: Any) -> UUID | None:
    """Return `value` as a UUID, or None when it is empty or malformed."""
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return UUID(value.strip())
    except ValueError:
        return None


def coerce_id(value: Any, kind: IdKind, entity: str) -> int | UUID:
    coerced = coerce_int_id(value) if kind is IdKind.INTEGER else coerce_uuid_id(value)
    if coerced is None:
        raise InvalidArgumentError(f"A valid {entity} ID is required", fields=["id"])
    return coerced


def coerce_ids(values: Iterable[Any] | None, kind: IdKind, entity: str) -> list[int | UUID]:
    """
    Coerce a bulk id list, collapsing duplicates while keeping first-seen order.

    Raises:
        InvalidArgumentError: if the list is missing/empty or any entry is not a valid id.
    """
    if not values:
        raise InvalidArgumentError("IDs array is required", fields=["ids"])

    seen: set = set()
    ids: list[int | UUID] = []
    for raw in values:
        coerced = coerce_id(raw, kind, entity)
        if coerced not in seen:
            seen.add(coerced)
            ids.append(coerced)
    return ids
