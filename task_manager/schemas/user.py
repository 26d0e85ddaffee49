from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from task_manager.utils.security import MAX_PASSWORD_BYTES

# Width of the users.name and users.email columns
MAX_NAME_LENGTH = 255
MAX_EMAIL_LENGTH = 255


def _check_password_length(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


def _check_email_length(value: str) -> str:
    if len(value) > MAX_EMAIL_LENGTH:
        raise ValueError(f"Email must be at most {MAX_EMAIL_LENGTH} characters")
    return value


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    email: EmailStr
    password: str = Field(min_length=6)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("email")
    @classmethod
    def email_fits_column(cls, v):
        return _check_email_length(v)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v):
        return _check_password_length(v)


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def email_fits_column(cls, v):
        return _check_email_length(v)


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class UserUpdate(BaseModel):
    """Partial profile update; only the fields present in the request change"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=MAX_NAME_LENGTH)
    email: Optional[EmailStr] = None

    @field_validator("name", "email")
    @classmethod
    def not_null_when_given(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        if info.field_name == "name" and not v.strip():
            raise ValueError("Name cannot be empty")
        if info.field_name == "name":
            return v.strip()
        return _check_email_length(v)


class PasswordChange(BaseModel):
    current_password: str = Field(alias="currentPassword", min_length=1)
    new_password: str = Field(alias="newPassword", min_length=6)

    model_config = {
        "populate_by_name": True
    }

    @field_validator("new_password")
    @classmethod
    def password_fits_bcrypt(cls, v):
        return _check_password_length(v)


class ProfileOut(BaseModel):
    user: UserOut


class ProfileUpdateOut(BaseModel):
    message: str
    user: UserOut


class MessageOut(BaseModel):
    message: str
