from sqlalchemy.ext.asyncio import AsyncSession

from refdata.config.settings import EngineLimits
from refdata.models.currency import Currency
from .base_repository import BaseRepository
from .resource import ResourceSpec


CURRENCIES = ResourceSpec(
    model=Currency,
    entity="Currency",
    plural="currencies",
    list_columns={
        "id": Currency.id,
        "name": Currency.name,
        "code": Currency.code,
        "symbol": Currency.symbol,
        "createdAt": Currency.created_at,
        "deletedAt": Currency.deleted_at,
    },
    text_filters={"name": Currency.name, "code": Currency.code},
    sort_columns={"id": Currency.id, "name": Currency.name, "createdAt": Currency.created_at},
    default_sort=Currency.name,
)


class CurrencyRepository(BaseRepository[Currency]):
    def __init__(self, db: AsyncSession, limits: EngineLimits):
        super().__init__(CURRENCIES, db, limits)
