# parking_api/schemas/user.py
import re
from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator
from parking_api.models.user import Role
from parking_api.schemas.common import CamelModel

EMAIL_RE = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")


def _check_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip().lower()
    if not EMAIL_RE.match(value):
        raise ValueError("Valid email is required")
    return value


class UserRegister(CamelModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str
    password: str = Field(min_length=6)

    check_email = field_validator("email")(_check_email)


class UserLogin(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None

    check_email = field_validator("email")(_check_email)


class PasswordChange(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)


class UserOut(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str
    role: Role
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginOut(CamelModel):
    user: UserOut
    token: str
