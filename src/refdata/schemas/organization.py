from pydantic import AnyHttpUrl, EmailStr, Field

from .common import CamelModel, PaginationQuery


class OrganizationCreate(CamelModel):
    country_id: int = Field(gt=0)
    name: str = Field(min_length=2, max_length=200)
    email: EmailStr
    phone: str = Field(min_length=5, max_length=50)
    url: AnyHttpUrl | None = None


class OrganizationUpdate(CamelModel):
    country_id: int | None = Field(default=None, gt=0)
    name: str | None = Field(default=None, min_length=2, max_length=200)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, min_length=5, max_length=50)
    url: AnyHttpUrl | None = None


class OrganizationFilter(PaginationQuery):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    country_name: str | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
