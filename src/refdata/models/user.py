import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from refdata.database.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """
    SQLAlchemy model for User.

    The only UUID-keyed resource. `password` holds a bcrypt hash and is never
    part of any read projection.
    """
    __tablename__ = "users"

    # Unique identifier for the user (primary key)
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True  # Indexed for faster lookups
    )

    # Username (must be unique and non-null)
    user_name: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False
    )

    # Email address (must be unique and non-null)
    email: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False
    )

    # Hashed password (never store plain-text passwords)
    password: Mapped[str] = mapped_column(
        String(255),    # Can handle long hashes like bcrypt
        nullable=False
    )

    def __repr__(self) -> str:
        # Helpful for debugging/logging
        return f"<User(id={self.id!r}, user_name={self.user_name!r})>"
