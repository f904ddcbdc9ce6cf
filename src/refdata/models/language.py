from sqlalchemy import Integer, String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from refdata.database.base import Base, TimestampMixin


class Language(TimestampMixin, Base):
    __tablename__ = "languages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    country_id: Mapped[int] = mapped_column(Integer, ForeignKey("countries.id"), nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # ISO 639 code, unique
    code: Mapped[str] = mapped_column(String(10), unique=True, nullable=False, index=True)

    # Name of the language in the language itself
    native: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Language(id={self.id!r}, code={self.code!r})>"
