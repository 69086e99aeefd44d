"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Account email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class RegisterRequest(BaseModel):
    """New reader account. Any submitted role is ignored; accounts start as 'user'."""

    email: str = Field(..., min_length=3, max_length=255, description="Account email")
    password: str = Field(..., min_length=8, max_length=128, description="Password")
    name: str = Field(..., min_length=1, max_length=100, description="Display name")


class UserPublic(BaseModel):
    """Account profile without the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: str
    name: str


class TokenResponse(BaseModel):
    """JWT returned after a successful login, with the caller's profile."""

    token: str = Field(..., description="JWT access token (send as 'Authorization: Bearer <token>')")
    user: UserPublic


class CurrentUser(BaseModel):
    """Authenticated identity (id, email, role, name) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: str
    name: str
