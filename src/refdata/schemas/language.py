from pydantic import Field

from .common import CamelModel, PaginationQuery


class LanguageCreate(CamelModel):
    country_id: int = Field(gt=0)
    name: str = Field(min_length=2, max_length=100)
    code: str = Field(min_length=2, max_length=10)
    native: str = Field(min_length=1, max_length=100)


class LanguageUpdate(CamelModel):
    country_id: int | None = Field(default=None, gt=0)
    name: str | None = Field(default=None, min_length=2, max_length=100)
    code: str | None = Field(default=None, min_length=2, max_length=10)
    native: str | None = Field(default=None, min_length=1, max_length=100)


class LanguageFilter(PaginationQuery):
    name: str | None = None
    code: str | None = None
