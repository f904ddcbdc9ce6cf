"""
Repository layer initialization module.

Usage:
    from refdata.repositories import CityRepository, UserRepository
"""

from .base_repository import BaseRepository
from .resource import ResourceSpec, JoinSpec
from .query_builder import QueryOptions, build_query_options
from .currency_repository import CurrencyRepository, CURRENCIES
from .country_repository import CountryRepository, COUNTRIES
from .language_repository import LanguageRepository, LANGUAGES
from .city_repository import CityRepository, CITIES
from .location_repository import LocationRepository, LOCATIONS
from .organization_repository import OrganizationRepository, ORGANIZATIONS
from .contact_repository import ContactRepository, CONTACTS
from .user_repository import UserRepository, USERS

__all__ = [
    "BaseRepository",
    "ResourceSpec",
    "JoinSpec",
    "QueryOptions",
    "build_query_options",
    "CurrencyRepository",
    "CountryRepository",
    "LanguageRepository",
    "CityRepository",
    "LocationRepository",
    "OrganizationRepository",
    "ContactRepository",
    "UserRepository",
    "CURRENCIES",
    "COUNTRIES",
    "LANGUAGES",
    "CITIES",
    "LOCATIONS",
    "ORGANIZATIONS",
    "CONTACTS",
    "USERS",
]
