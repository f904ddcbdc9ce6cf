from sqlalchemy import Integer, String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from refdata.database.base import Base, TimestampMixin


class Contact(TimestampMixin, Base):
    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    organization_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("organizations.id"),
        nullable=False,
        index=True
    )

    full_name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)

    # Job title, unique across contacts
    title: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    phone: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Contact(id={self.id!r}, full_name={self.full_name!r})>"
