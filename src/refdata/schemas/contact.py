from pydantic import EmailStr, Field

from .common import CamelModel, PaginationQuery


class ContactCreate(CamelModel):
    organization_id: int = Field(gt=0)
    full_name: str = Field(min_length=2, max_length=200)
    email: EmailStr
    phone: str = Field(min_length=5, max_length=50)
    title: str = Field(min_length=1, max_length=150)


class ContactUpdate(CamelModel):
    organization_id: int | None = Field(default=None, gt=0)
    full_name: str | None = Field(default=None, min_length=2, max_length=200)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, min_length=5, max_length=50)
    title: str | None = Field(default=None, min_length=1, max_length=150)


class ContactFilter(PaginationQuery):
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    title: str | None = None
    organization_name: str | None = None
    organization_email: str | None = None
    organization_phone: str | None = None
