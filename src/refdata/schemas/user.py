import re

from pydantic import EmailStr, Field, field_validator

from .common import CamelModel, PaginationQuery

# at least one lower, upper, digit and special character
_PASSWORD_RULE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,30}$")
PASSWORD_RULE_MESSAGE = (
    "Password must contain at least one uppercase letter, one lowercase letter, "
    "one number, and one special character"
)


def _check_password(value: str | None) -> str | None:
    if value is not None and not _PASSWORD_RULE.match(value):
        raise ValueError(PASSWORD_RULE_MESSAGE)
    return value


class UserCreate(CamelModel):
    user_name: str = Field(min_length=4, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8, max_length=30)

    @field_validator("password")
    @classmethod
    def check_password_rule(cls, value: str | None) -> str | None:
        return _check_password(value)


class UserUpdate(CamelModel):
    user_name: str | None = Field(default=None, min_length=4, max_length=50)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=8, max_length=30)

    @field_validator("password")
    @classmethod
    def check_password_rule(cls, value: str | None) -> str | None:
        return _check_password(value)


class UserFilter(PaginationQuery):
    user_name: str | None = None
    email: str | None = None
