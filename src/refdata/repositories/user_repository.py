"""
User repository.

Users are keyed by UUID and carry a password. The password is bcrypt-hashed
before any write and is excluded from every read projection.
"""
import asyncio
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from refdata.config.settings import EngineLimits
from refdata.core.security import hash_password
from refdata.models.user import User
from refdata.validators.identifiers import IdKind
from .base_repository import BaseRepository
from .resource import ResourceSpec


USERS = ResourceSpec(
    model=User,
    entity="User",
    plural="users",
    list_columns={
        "id": User.id,
        "userName": User.user_name,
        "email": User.email,
        "createdAt": User.created_at,
        "deletedAt": User.deleted_at,
    },
    text_filters={"userName": User.user_name, "email": User.email},
    sort_columns={"id": User.id, "name": User.user_name, "createdAt": User.created_at},
    default_sort=User.user_name,
    id_kind=IdKind.UUID,
    hidden_fields=frozenset({"password"}),
)


class UserRepository(BaseRepository[User]):
    def __init__(self, db: AsyncSession, limits: EngineLimits, bcrypt_rounds: int | None = None):
        """
        Args:
            db: The async database session
            limits: Pagination and batching limits
            bcrypt_rounds: Work factor for password hashing; None uses the configured default
        """
        super().__init__(USERS, db, limits)
        self.bcrypt_rounds = bcrypt_rounds

    async def _prepare_values(self, values: dict[str, Any]) -> dict[str, Any]:
        if values.get("email"):
            values["email"] = values["email"].strip().lower()  # Normalize email to lowercase
        if values.get("password"):
            # CPU-bound: hash in a worker thread, off the event loop
            values["password"] = await asyncio.to_thread(hash_password, values["password"], self.bcrypt_rounds)
        return values
