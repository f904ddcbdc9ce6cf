from sqlalchemy import Boolean, Integer, String, ForeignKey, false
from sqlalchemy.orm import Mapped, mapped_column

from refdata.database.base import Base, TimestampMixin


class Location(TimestampMixin, Base):
    """
    SQLAlchemy model for Location.

    A postal address inside a city. Locations are removed together with their city
    (ON DELETE CASCADE) and linked to organizations through organization_locations.
    """
    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    address: Mapped[str] = mapped_column(String(255), nullable=False)

    title: Mapped[str] = mapped_column(String(150), nullable=False)

    city_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("cities.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    postal_code: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    # Marks the main location of an organization
    is_primary: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=false(),
        nullable=False,
        index=True
    )

    def __repr__(self) -> str:
        return f"<Location(id={self.id!r}, title={self.title!r})>"
