"""
Pydantic schemas for authentication endpoints.
"""
from typing import Optional
from pydantic import EmailStr, Field, field_validator

from interview_coach.schemas.common import CamelModel


class SignupRequest(CamelModel):
    """Request schema for user signup."""
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=8, description="User's password (min 8 characters)")
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """bcrypt only hashes the first 72 bytes."""
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password too long (bcrypt limit 72 bytes)")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "email": "jane.doe@example.com",
                "password": "SecurePass123",
                "firstName": "Jane",
                "lastName": "Doe"
            }
        }


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class UserProfile(CamelModel):
    """Normalized profile returned by /api/auth/user."""
    id: str
    email: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    profile_image_url: Optional[str] = None
    auth_provider: str


class GoogleUserProfile(CamelModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    email_verified: Optional[bool] = None


class GoogleSessionResponse(CamelModel):
    is_authenticated: bool
    user: Optional[GoogleUserProfile] = None
