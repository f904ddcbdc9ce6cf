"""
Password hashing utilities using bcrypt.
"""

import bcrypt

from refdata.config import get_settings


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password to hash.
        rounds: bcrypt work factor; defaults to the BCRYPT_ROUNDS setting.

    Returns:
        Hashed password string (includes salt and algorithm info), e.g. "$2b$12$...".
    """
    salt = bcrypt.gensalt(rounds=rounds or get_settings().BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

