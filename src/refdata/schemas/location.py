from pydantic import Field

from .common import CamelModel, PaginationQuery


class LocationCreate(CamelModel):
    city_id: int = Field(gt=0)
    address: str = Field(min_length=5, max_length=255)
    title: str = Field(min_length=1, max_length=150)
    postal_code: str = Field(min_length=2, max_length=20)
    is_primary: bool = False


class LocationUpdate(CamelModel):
    city_id: int | None = Field(default=None, gt=0)
    address: str | None = Field(default=None, min_length=5, max_length=255)
    title: str | None = Field(default=None, min_length=1, max_length=150)
    postal_code: str | None = Field(default=None, min_length=2, max_length=20)
    is_primary: bool | None = None


class LocationFilter(PaginationQuery):
    postal_code: str | None = None
    city_name: str | None = None
