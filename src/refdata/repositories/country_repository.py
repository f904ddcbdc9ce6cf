from sqlalchemy.ext.asyncio import AsyncSession

from refdata.config.settings import EngineLimits
from refdata.models.country import Country
from refdata.models.currency import Currency
from .base_repository import BaseRepository
from .resource import JoinSpec, ResourceSpec


COUNTRIES = ResourceSpec(
    model=Country,
    entity="Country",
    plural="countries",
    list_columns={
        "id": Country.id,
        "name": Country.name,
        "iso": Country.iso,
        "flag": Country.flag,
        # currency display name, NULL when the currency row is missing
        "currency": Currency.name,
        "createdAt": Country.created_at,
        "deletedAt": Country.deleted_at,
    },
    text_filters={"name": Country.name, "iso": Country.iso},
    sort_columns={"id": Country.id, "name": Country.name, "createdAt": Country.created_at},
    default_sort=Country.name,
    joins=(JoinSpec(Currency, Currency.id == Country.currency_id),),
)


class CountryRepository(BaseRepository[Country]):
    def __init__(self, db: AsyncSession, limits: EngineLimits):
        super().__init__(COUNTRIES, db, limits)

    async def _prepare_values(self, values):
        # ISO codes are stored upper-case so the unique constraint is case-insensitive in practice
        if values.get("iso"):
            values["iso"] = values["iso"].strip().upper()
        return values
