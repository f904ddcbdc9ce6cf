from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from refdata.config.settings import EngineLimits
from refdata.models.contact import Contact
from refdata.models.country import Country
from refdata.models.organization import Organization
from .base_repository import BaseRepository
from .resource import JoinSpec, ResourceSpec


def _nest_organization_row(row: Mapping[str, Any]) -> dict[str, Any]:
    """Group the joined contact and country columns under their own keys."""
    return {
        "id": row["id"],
        "name": row["name"],
        "email": row["email"],
        "phone": row["phone"],
        "url": row["url"],
        "createdAt": row["createdAt"],
        "deletedAt": row["deletedAt"],
        "contact": {
            "name": row["contactName"],
            "email": row["contactEmail"],
            "phone": row["contactPhone"],
        },
        "country": {
            "name": row["countryName"],
            "iso": row["countryIso"],
        },
    }


ORGANIZATIONS = ResourceSpec(
    model=Organization,
    entity="Organization",
    plural="organizations",
    list_columns={
        "id": Organization.id,
        "name": Organization.name,
        "email": Organization.email,
        "phone": Organization.phone,
        "url": Organization.url,
        "createdAt": Organization.created_at,
        "deletedAt": Organization.deleted_at,
        "contactName": Contact.full_name,
        "contactEmail": Contact.email,
        "contactPhone": Contact.phone,
        "countryName": Country.name,
        "countryIso": Country.iso,
    },
    text_filters={
        "name": Organization.name,
        "email": Organization.email,
        "phone": Organization.phone,
        "countryName": Country.name,
        "contactName": Contact.full_name,
        "contactEmail": Contact.email,
        "contactPhone": Contact.phone,
    },
    sort_columns={
        "id": Organization.id,
        "name": Organization.name,
        "createdAt": Organization.created_at,
    },
    default_sort=Organization.name,
    joins=(
        JoinSpec(Country, Country.id == Organization.country_id),
        JoinSpec(Contact, Contact.organization_id == Organization.id),
    ),
    row_mapper=_nest_organization_row,
)


class OrganizationRepository(BaseRepository[Organization]):
    def __init__(self, db: AsyncSession, limits: EngineLimits):
        super().__init__(ORGANIZATIONS, db, limits)
