from pydantic import Field

from .common import CamelModel, PaginationQuery


class CurrencyCreate(CamelModel):
    name: str = Field(min_length=2, max_length=100)
    code: str = Field(min_length=2, max_length=10)
    symbol: str = Field(min_length=1, max_length=10)


class CurrencyUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=2, max_length=100)
    code: str | None = Field(default=None, min_length=2, max_length=10)
    symbol: str | None = Field(default=None, min_length=1, max_length=10)


class CurrencyFilter(PaginationQuery):
    name: str | None = None
    code: str | None = None
