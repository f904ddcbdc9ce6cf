from pydantic import Field

from .common import CamelModel, PaginationQuery


class CountryCreate(CamelModel):
    currency_id: int = Field(gt=0)
    name: str = Field(min_length=2, max_length=100)
    # ISO 3166 alpha-2 or alpha-3
    iso: str = Field(min_length=2, max_length=3)
    flag: str = Field(min_length=1, max_length=255)


class CountryUpdate(CamelModel):
    currency_id: int | None = Field(default=None, gt=0)
    name: str | None = Field(default=None, min_length=2, max_length=100)
    iso: str | None = Field(default=None, min_length=2, max_length=3)
    flag: str | None = Field(default=None, min_length=1, max_length=255)


class CountryFilter(PaginationQuery):
    name: str | None = None
    iso: str | None = None
