from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from refdata.database.base import Base, TimestampMixin


class Currency(TimestampMixin, Base):
    """
    SQLAlchemy model for Currency.

    A currency is referenced by countries (one currency per country).
    """
    __tablename__ = "currencies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # ISO 4217 code (e.g. "USD"), unique across currencies
    code: Mapped[str] = mapped_column(String(10), unique=True, nullable=False, index=True)

    symbol: Mapped[str] = mapped_column(String(10), nullable=False)

    def __repr__(self) -> str:
        return f"<Currency(id={self.id!r}, code={self.code!r})>"
