from typing import Any


def to_uppercase(value: str | None) -> str | None:
    """
    Upper-case a string setting, leaving None untouched.
    """
    if value is None:
        return None
    return value.strip().upper()


def to_lowercase(value: str | None) -> str | None:
    """
    Lower-case a string setting, leaving None untouched.
    """
    if value is None:
        return None
    return value.strip().lower()


def positive_int_or_default(value: Any, default: int) -> int:
    """
    Coerce an environment value to a positive int, falling back to `default`.

    Missing, blank, zero, negative and non-numeric values all resolve to the
    fallback, so `APP_PAGINATION_MAXIMUM_LIMIT=` in a .env file behaves the same
    as leaving the variable out.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default
