from sqlalchemy.ext.asyncio import AsyncSession

from refdata.config.settings import EngineLimits
from refdata.models.city import City
from refdata.models.location import Location
from .base_repository import BaseRepository
from .resource import JoinSpec, ResourceSpec


LOCATIONS = ResourceSpec(
    model=Location,
    entity="Location",
    plural="locations",
    list_columns={
        "id": Location.id,
        "address": Location.address,
        "title": Location.title,
        "postalCode": Location.postal_code,
        "isPrimary": Location.is_primary,
        "cityName": City.name,
        "createdAt": Location.created_at,
        "deletedAt": Location.deleted_at,
    },
    text_filters={"postalCode": Location.postal_code, "cityName": City.name},
    # "name" sorts by the city a location belongs to
    sort_columns={"id": Location.id, "name": City.name, "createdAt": Location.created_at},
    default_sort=City.name,
    joins=(JoinSpec(City, Location.city_id == City.id),),
)


class LocationRepository(BaseRepository[Location]):
    def __init__(self, db: AsyncSession, limits: EngineLimits):
        super().__init__(LOCATIONS, db, limits)
