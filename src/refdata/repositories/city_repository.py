from sqlalchemy.ext.asyncio import AsyncSession

from refdata.config.settings import EngineLimits
from refdata.models.city import City
from refdata.models.country import Country
from .base_repository import BaseRepository
from .resource import JoinSpec, ResourceSpec


CITIES = ResourceSpec(
    model=City,
    entity="City",
    plural="cities",
    list_columns={
        "id": City.id,
        "name": City.name,
        "countryName": Country.name,
        "createdAt": City.created_at,
        "deletedAt": City.deleted_at,
    },
    text_filters={"name": City.name, "countryName": Country.name},
    sort_columns={"id": City.id, "name": City.name, "createdAt": City.created_at},
    default_sort=City.name,
    joins=(JoinSpec(Country, City.country_id == Country.id),),
)


class CityRepository(BaseRepository[City]):
    def __init__(self, db: AsyncSession, limits: EngineLimits):
        super().__init__(CITIES, db, limits)
