"""Authentication schemas."""
from typing import Literal
from pydantic import Field, field_validator

from edconsult.core.sanitization import normalize_email, sanitize_name
from edconsult.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    name: str
    email: str
    password: str = Field(..., min_length=6, max_length=128)
    role: Literal["admin", "consultant", "client"]

    @field_validator("name")
    @classmethod
    def sanitize_name_field(cls, v: str) -> str:
        return sanitize_name(v)

    @field_validator("email")
    @classmethod
    def normalize_email_field(cls, v: str) -> str:
        return normalize_email(v)


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserInfo(CamelModel):
    id: int
    name: str
    email: str
    role: str


class RegisterResponse(CamelModel):
    success: bool = True
    message: str
    user_id: int


class LoginResponse(CamelModel):
    success: bool = True
    message: str
    token: str
    user: UserInfo


class VerifyResponse(CamelModel):
    success: bool = True
    user: UserInfo
