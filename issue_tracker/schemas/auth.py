"""User and authentication schemas."""
from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator

from .common import BaseSchema, reject_null

# bcrypt refuses input longer than this
PASSWORD_MAX_BYTES = 72


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes")
    return value


class SignupRequest(BaseSchema):
    """Signup request schema."""

    first_name: str = Field(..., min_length=1, max_length=100, description="First name")
    last_name: Optional[str] = Field(None, max_length=100, description="Last name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, max_length=64, description="Account password")
    mobile_number: Optional[str] = Field(None, max_length=32, description="Mobile number")
    country: Optional[str] = Field(None, max_length=64, description="Country code")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "firstName": "Mayur",
                "lastName": "Mahamune",
                "email": "mayur@example.com",
                "password": "s3cret-pass",
                "mobileNumber": "91-7276789024",
                "country": "IN",
            }
        }
    )

    @field_validator("password")
    @classmethod
    def _password_fits(cls, value):
        return _check_password_bytes(value)

    @field_validator("mobile_number", mode="before")
    @classmethod
    def _number_as_text(cls, value):
        if isinstance(value, int):
            return str(value)
        return value


class LoginRequest(BaseSchema):
    """Login request schema."""

    email: EmailStr = Field(..., description="User email")
    password: str = Field(..., min_length=1, description="User password")


class ForgotPasswordRequest(BaseSchema):
    """Forgot-password request schema."""

    email: EmailStr = Field(..., description="User email")


class ResetPasswordRequest(BaseSchema):
    """Reset-password request schema."""

    reset_token: str = Field(..., min_length=1, description="Token from the reset mail")
    new_password: str = Field(..., min_length=8, max_length=64, description="New password")

    @field_validator("new_password")
    @classmethod
    def _password_fits(cls, value):
        return _check_password_bytes(value)


class UserUpdate(BaseSchema):
    """User edit schema."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    mobile_number: Optional[str] = Field(None, max_length=32)
    country: Optional[str] = Field(None, max_length=64)

    @field_validator("first_name")
    @classmethod
    def _first_name_not_null(cls, value):
        return reject_null(value)

    @field_validator("mobile_number", mode="before")
    @classmethod
    def _number_as_text(cls, value):
        if isinstance(value, int):
            return str(value)
        return value


class UserDetails(BaseSchema):
    """User projection safe to return to clients."""

    user_id: str
    first_name: str
    last_name: Optional[str] = None
    email: str
    mobile_number: Optional[str] = None
    country: Optional[str] = None
    user_verification_status: bool
    created_on: datetime
    modified_on: datetime


class SessionClaims(BaseSchema):
    """Identity claims embedded in a session token."""

    user_id: str
    first_name: str
    last_name: Optional[str] = None
    email: str
    user_verification_status: bool

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class LoginData(BaseSchema):
    """Login response payload."""

    auth_token: str = Field(..., description="Signed session token")
    user_details: UserDetails
