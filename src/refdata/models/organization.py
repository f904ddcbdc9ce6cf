from sqlalchemy import Integer, String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from refdata.database.base import Base, TimestampMixin


class Organization(TimestampMixin, Base):
    """
    SQLAlchemy model for Organization.

    Tenant record: belongs to a country, has (at most) one contact and is linked
    to locations and users through the association tables.
    """
    __tablename__ = "organizations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    country_id: Mapped[int] = mapped_column(Integer, ForeignKey("countries.id"), nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)

    # Phone numbers identify organizations, so they must be unique
    phone: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)

    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    url: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Organization(id={self.id!r}, name={self.name!r})>"
