"""
Centralized access to all database models.

Importing this package registers every table on `Base.metadata`, which is what
`create_all()` in tests relies on:

    from refdata.models import Country, Currency, User
"""

from .currency import Currency
from .country import Country
from .language import Language
from .city import City
from .location import Location
from .organization import Organization
from .contact import Contact
from .user import User
from .organization_location import OrganizationLocation
from .organization_user import OrganizationUser

__all__ = [
    "Currency",
    "Country",
    "Language",
    "City",
    "Location",
    "Organization",
    "Contact",
    "User",
    "OrganizationLocation",
    "OrganizationUser",
]
