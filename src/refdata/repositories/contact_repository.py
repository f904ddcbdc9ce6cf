from sqlalchemy.ext.asyncio import AsyncSession

from refdata.config.settings import EngineLimits
from refdata.models.contact import Contact
from refdata.models.organization import Organization
from .base_repository import BaseRepository
from .resource import JoinSpec, ResourceSpec


CONTACTS = ResourceSpec(
    model=Contact,
    entity="Contact",
    plural="contacts",
    list_columns={
        "id": Contact.id,
        "fullName": Contact.full_name,
        "title": Contact.title,
        "phone": Contact.phone,
        "email": Contact.email,
        "organizationName": Organization.name,
        "organizationEmail": Organization.email,
        "organizationPhone": Organization.phone,
        "createdAt": Contact.created_at,
        "deletedAt": Contact.deleted_at,
    },
    text_filters={
        "fullName": Contact.full_name,
        "email": Contact.email,
        "phone": Contact.phone,
        "title": Contact.title,
        "organizationName": Organization.name,
        "organizationEmail": Organization.email,
        "organizationPhone": Organization.phone,
    },
    sort_columns={
        "id": Contact.id,
        "fullName": Contact.full_name,
        "phone": Contact.phone,
        "title": Contact.title,
        "organizationName": Organization.name,
        "organizationPhone": Organization.phone,
        "organizationEmail": Organization.email,
        "createdAt": Contact.created_at,
    },
    default_sort=Contact.full_name,
    joins=(JoinSpec(Organization, Contact.organization_id == Organization.id),),
)


class ContactRepository(BaseRepository[Contact]):
    def __init__(self, db: AsyncSession, limits: EngineLimits):
        super().__init__(CONTACTS, db, limits)
