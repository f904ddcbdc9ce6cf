"""Fixtures for repository tests."""

import uuid

import pytest
from faker import Faker
from sqlalchemy.ext.asyncio import AsyncSession

from refdata.config import EngineLimits
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

# NOTE: All fixtures in this file depend on the `db_session` and `limits` fixtures defined in conftest.py.
# The `create_*` factories COMMIT what they insert: a failing operation under test rolls the
# session back, and seeded rows must survive that.

fake = Faker()


@pytest.fixture
def currency_repository(db_session: AsyncSession, limits: EngineLimits) -> CurrencyRepository:
    return CurrencyRepository(db_session, limits)


@pytest.fixture
def country_repository(db_session: AsyncSession, limits: EngineLimits) -> CountryRepository:
    return CountryRepository(db_session, limits)


@pytest.fixture
def language_repository(db_session: AsyncSession, limits: EngineLimits) -> LanguageRepository:
    return LanguageRepository(db_session, limits)


@pytest.fixture
def city_repository(db_session: AsyncSession, limits: EngineLimits) -> CityRepository:
    return CityRepository(db_session, limits)


@pytest.fixture
def location_repository(db_session: AsyncSession, limits: EngineLimits) -> LocationRepository:
    return LocationRepository(db_session, limits)


@pytest.fixture
def organization_repository(db_session: AsyncSession, limits: EngineLimits) -> OrganizationRepository:
    return OrganizationRepository(db_session, limits)


@pytest.fixture
def contact_repository(db_session: AsyncSession, limits: EngineLimits) -> ContactRepository:
    return ContactRepository(db_session, limits)


@pytest.fixture
def user_repository(db_session: AsyncSession, limits: EngineLimits) -> UserRepository:
    """Lowest bcrypt work factor; hashing cost is irrelevant to these tests."""
    return UserRepository(db_session, limits, bcrypt_rounds=4)


def _unique(prefix: str) -> str:
    return f"{prefix}{uuid.uuid4().hex[:6]}"


@pytest.fixture
async def create_currency(currency_repository: CurrencyRepository, db_session: AsyncSession):
    """
    Factory: insert a currency and commit. Returns the new id.

    Usage:
        currency_id = await create_currency(code="EUR")
    """
    async def _create(**overrides) -> int:
        data = {
            "name": fake.currency_name()[:100],
            "code": _unique("C")[:10],
            "symbol": "$",
        }
        data.update(overrides)
        created = await currency_repository.create(**data)
        await db_session.commit()
        return created["id"]

    return _create


@pytest.fixture
async def create_country(country_repository: CountryRepository, create_currency, db_session: AsyncSession):
    """
    Factory: insert a country (and a currency for it unless `currency_id` is given).
    """
    async def _create(**overrides) -> int:
        if "currency_id" not in overrides:
            overrides["currency_id"] = await create_currency()
        data = {
            "name": fake.country()[:100],
            "iso": uuid.uuid4().hex[:3].upper(),
            "flag": "flag.png",
        }
        data.update(overrides)
        created = await country_repository.create(**data)
        await db_session.commit()
        return created["id"]

    return _create


@pytest.fixture
async def create_city(city_repository: CityRepository, create_country, db_session: AsyncSession):
    async def _create(**overrides) -> int:
        if "country_id" not in overrides:
            overrides["country_id"] = await create_country()
        data = {"name": fake.city()}
        data.update(overrides)
        created = await city_repository.create(**data)
        await db_session.commit()
        return created["id"]

    return _create


@pytest.fixture
async def create_organization(organization_repository: OrganizationRepository, create_country, db_session: AsyncSession):
    async def _create(**overrides) -> int:
        if "country_id" not in overrides:
            overrides["country_id"] = await create_country()
        data = {
            "name": fake.company()[:200],
            "email": fake.company_email(),
            "phone": _unique("+1-555-"),
            "url": "https://example.com/",
        }
        data.update(overrides)
        created = await organization_repository.create(**data)
        await db_session.commit()
        return created["id"]

    return _create


@pytest.fixture
async def create_contact(contact_repository: ContactRepository, create_organization, db_session: AsyncSession):
    async def _create(**overrides) -> int:
        if "organization_id" not in overrides:
            overrides["organization_id"] = await create_organization()
        data = {
            "full_name": fake.name(),
            "email": fake.email(),
            "phone": _unique("+1-555-"),
            "title": _unique("Manager "),
        }
        data.update(overrides)
        created = await contact_repository.create(**data)
        await db_session.commit()
        return created["id"]

    return _create


@pytest.fixture
async def create_user(user_repository: UserRepository, db_session: AsyncSession):
    async def _create(**overrides):
        data = {
            "user_name": _unique("user_"),
            "email": f"{_unique('user_')}@example.com",
            "password": "Str0ng!Pass",
        }
        data.update(overrides)
        created = await user_repository.create(**data)
        await db_session.commit()
        return created["id"]

    return _create


@pytest.fixture
async def sample_currency(create_currency) -> int:
    return await create_currency(name="US Dollar", code="USD", symbol="$")


@pytest.fixture
async def sample_country(create_country, sample_currency) -> int:
    return await create_country(name="United States", iso="US", currency_id=sample_currency)


@pytest.fixture
async def sample_countries(create_country, sample_currency) -> list[int]:
    """
    Five committed countries sharing one currency, in insertion (and id) order.

    Names are chosen so alphabetical order differs from id order.
    """
    names = ["Egypt", "Brazil", "Denmark", "Austria", "Chile"]
    return [
        await create_country(name=name, iso=name[:3].upper(), currency_id=sample_currency)
        for name in names
    ]
