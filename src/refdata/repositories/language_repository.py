from sqlalchemy.ext.asyncio import AsyncSession

from refdata.config.settings import EngineLimits
from refdata.models.country import Country
from refdata.models.language import Language
from .base_repository import BaseRepository
from .resource import JoinSpec, ResourceSpec


LANGUAGES = ResourceSpec(
    model=Language,
    entity="Language",
    plural="languages",
    list_columns={
        "id": Language.id,
        "name": Language.name,
        "code": Language.code,
        "native": Language.native,
        "countryName": Country.name,
        "createdAt": Language.created_at,
        "deletedAt": Language.deleted_at,
    },
    text_filters={"name": Language.name, "code": Language.code},
    sort_columns={
        "id": Language.id,
        "name": Language.name,
        "code": Language.code,
        "createdAt": Language.created_at,
    },
    default_sort=Language.name,
    joins=(JoinSpec(Country, Language.country_id == Country.id),),
)


class LanguageRepository(BaseRepository[Language]):
    def __init__(self, db: AsyncSession, limits: EngineLimits):
        super().__init__(LANGUAGES, db, limits)
