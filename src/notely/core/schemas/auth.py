"""
Authentication and profile schemas.

These schemas define the API contracts for registration, login, bearer
tokens and profile management.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, field_validator


class LoginRequest(BaseModel):
    """User login request schema."""

    email: EmailStr = Field(description="Account email")
    password: str = Field(min_length=1, description="User password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"email": "alice@example.com", "password": "password123"}
        }
    )


class ProfileFields(BaseModel):
    """Fields shared by registration and profile update."""

    name: str = Field(min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(description="Unique email address")
    profile_picture: Optional[HttpUrl] = Field(default=None, description="Profile picture URL")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Reject whitespace-only names."""
        if not v.strip():
            raise ValueError("Name cannot be blank")
        return v.strip()

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        """Lowercase and cap email length."""
        v = v.strip().lower()
        if len(v) > 255:
            raise ValueError("Email may not be greater than 255 characters")
        return v

    def profile_data(self) -> dict:
        """Column values for the users table."""
        return {
            "name": self.name,
            "email": self.email,
            "profile_picture": str(self.profile_picture) if self.profile_picture else None,
        }


class RegisterRequest(ProfileFields):
    """User registration request schema."""

    password: str = Field(min_length=8, max_length=4096, description="User password")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Alice",
                "email": "alice@example.com",
                "password": "password123",
                "profile_picture": None,
            }
        }
    )


class UserUpdateRequest(ProfileFields):
    """User profile update request schema."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"name": "Alice Liddell", "email": "alice@example.com"}
        }
    )


class UserResponse(BaseModel):
    """Public user information. Never carries the password hash."""

    id: uuid.UUID = Field(description="User unique identifier")
    name: str = Field(description="Display name")
    email: str = Field(description="Email address")
    profile_picture: Optional[str] = Field(default=None, description="Profile picture URL")
    created_at: datetime = Field(description="Account creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Envelope returned by register and login."""

    s: bool = Field(default=True)
    message: str
    user: UserResponse
    token: str = Field(description="Opaque bearer token")


class UserEnvelope(BaseModel):
    """Envelope carrying a user."""

    s: bool = Field(default=True)
    message: str
    user: UserResponse


class UserDetailResponse(BaseModel):
    user: UserResponse


class UploadResponse(BaseModel):
    """Envelope returned by profile picture upload."""

    s: bool = Field(default=True)
    message: str
    url: str = Field(description="Public URL of the stored picture")
