from pydantic import Field

from .common import CamelModel, PaginationQuery


class CityCreate(CamelModel):
    country_id: int = Field(gt=0)
    name: str = Field(min_length=1, max_length=150)


class CityUpdate(CamelModel):
    country_id: int | None = Field(default=None, gt=0)
    name: str | None = Field(default=None, min_length=1, max_length=150)


class CityFilter(PaginationQuery):
    name: str | None = None
    country_name: str | None = None
