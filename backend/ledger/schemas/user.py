"""
Pydantic schemas for User entity and authentication.
"""
from pydantic import EmailStr, field_validator
from typing import Optional
from ledger.schemas.common import CamelModel

MIN_PASSWORD_LENGTH = 6


class RegisterRequest(CamelModel):
    """Schema for user registration."""
    name: Optional[str] = None
    email: EmailStr
    password: str
    confirm_password: str

    @field_validator("name")
    @classmethod
    def blank_name_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class LoginRequest(CamelModel):
    """Schema for user login."""
    email: str
    password: str


class Identity(CamelModel):
    """Public identity of the signed-in user. Never includes the password hash."""
    id: int
    email: str
    name: Optional[str] = None
