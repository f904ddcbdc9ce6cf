import uuid

from sqlalchemy import Integer, ForeignKey, UUID
from sqlalchemy.orm import Mapped, mapped_column

from refdata.database.base import Base, TimestampMixin


class OrganizationUser(TimestampMixin, Base):
    """Association between organizations and users (composite primary key)."""
    __tablename__ = "organization_users"

    organization_id: Mapped[int] = mapped_column(Integer, ForeignKey("organizations.id"), primary_key=True)

    # UUID type must match the users.id field
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("users.id"), primary_key=True)

    def __repr__(self) -> str:
        return f"<OrganizationUser(organization_id={self.organization_id!r}, user_id={self.user_id!r})>"
