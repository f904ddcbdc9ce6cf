from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from refdata.database.base import Base, TimestampMixin


class OrganizationLocation(TimestampMixin, Base):
    """Association between organizations and their locations (composite primary key)."""
    __tablename__ = "organization_locations"

    organization_id: Mapped[int] = mapped_column(Integer, ForeignKey("organizations.id"), primary_key=True)

    location_id: Mapped[int] = mapped_column(Integer, ForeignKey("locations.id"), primary_key=True)

    def __repr__(self) -> str:
        return f"<OrganizationLocation(organization_id={self.organization_id!r}, location_id={self.location_id!r})>"
