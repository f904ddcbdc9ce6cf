from sqlalchemy import Integer, String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from refdata.database.base import Base, TimestampMixin


class Country(TimestampMixin, Base):
    """
    SQLAlchemy model for Country.

    Each country uses a single currency; cities, languages and organizations
    point back to it.
    """
    __tablename__ = "countries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # Two/three letter ISO code; must be unique
    iso: Mapped[str] = mapped_column(String(3), unique=True, nullable=False, index=True)

    # Flag emoji or image reference
    flag: Mapped[str] = mapped_column(String(255), nullable=False)

    currency_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("currencies.id"),
        nullable=False,
        index=True
    )

    def __repr__(self) -> str:
        return f"<Country(id={self.id!r}, iso={self.iso!r})>"
