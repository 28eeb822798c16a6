import re

from pydantic import EmailStr, field_validator

from marketplace.api.schemas.common import CamelModel, CamelRequest
from marketplace.application.interfaces.user_repo import UserRecord

_PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]+$")


class UserProfile(CamelModel):
    id: str
    first_name: str
    last_name: str | None = None
    email: EmailStr
    phone: str | None = None
    address: str | None = None
    role: str

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserProfile":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            phone=user.phone,
            address=user.address,
            role=user.role,
        )


class ProfileResponse(CamelModel):
    success: bool = True
    user: UserProfile


class UpdateProfileRequest(CamelRequest):
    first_name: str
    last_name: str | None = None
    phone: str | None = None
    address: str | None = None

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("First name is required")
        return value

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Last name cannot be empty")
        return value

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str | None) -> str | None:
        if value is None or value == "":
            return None
        if not _PHONE_PATTERN.match(value):
            raise ValueError("Invalid phone number format")
        return value
