from fastapi import APIRouter

from refdata.repositories import (
    CityRepository,
    ContactRepository,
    CountryRepository,
    CurrencyRepository,
    LanguageRepository,
    LocationRepository,
    OrganizationRepository,
    UserRepository,
)
from refdata.schemas.city import CityCreate, CityFilter, CityUpdate
from refdata.schemas.contact import ContactCreate, ContactFilter, ContactUpdate
from refdata.schemas.country import CountryCreate, CountryFilter, CountryUpdate
from refdata.schemas.currency import CurrencyCreate, CurrencyFilter, CurrencyUpdate
from refdata.schemas.language import LanguageCreate, LanguageFilter, LanguageUpdate
from refdata.schemas.location import LocationCreate, LocationFilter, LocationUpdate
from refdata.schemas.organization import OrganizationCreate, OrganizationFilter, OrganizationUpdate
from refdata.schemas.user import UserCreate, UserFilter, UserUpdate
from .error_handlers import register_exception_handlers
from .router_factory import ResourceRoutes, build_router

RESOURCES = [
    ResourceRoutes("/organizations", OrganizationRepository, OrganizationCreate, OrganizationUpdate, OrganizationFilter),
    ResourceRoutes("/contacts", ContactRepository, ContactCreate, ContactUpdate, ContactFilter),
    ResourceRoutes("/countries", CountryRepository, CountryCreate, CountryUpdate, CountryFilter),
    ResourceRoutes("/currencies", CurrencyRepository, CurrencyCreate, CurrencyUpdate, CurrencyFilter),
    ResourceRoutes("/languages", LanguageRepository, LanguageCreate, LanguageUpdate, LanguageFilter),
    ResourceRoutes("/cities", CityRepository, CityCreate, CityUpdate, CityFilter),
    ResourceRoutes("/locations", LocationRepository, LocationCreate, LocationUpdate, LocationFilter),
    ResourceRoutes("/users", UserRepository, UserCreate, UserUpdate, UserFilter),
]

api_router = APIRouter()
for _resource in RESOURCES:
    api_router.include_router(build_router(_resource))

__all__ = ["api_router", "RESOURCES", "register_exception_handlers"]
