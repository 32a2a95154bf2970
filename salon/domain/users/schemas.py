"""User domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email, validate_phone


class ProfileUpdate(BaseModel):
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    phone_number: Optional[str] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError("First and last name are required")
        return v.strip()

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, v):
        if v:
            return validate_phone(v)
        return None


class AdminUserUpdate(ProfileUpdate):
    role_id: int


class RegisterRequest(ProfileUpdate):
    email: str
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class UserResponse(BaseModel):
    user_id: int
    role_id: int
    first_name: str
    last_name: str
    email: str
    phone_number: Optional[str] = None
    created_at: Optional[datetime] = None


class ManicuristResponse(BaseModel):
    user_id: int
    first_name: str
    last_name: str
    phone_number: Optional[str] = None


class LoginResponse(BaseModel):
    token: str
    user: UserResponse
