"""Authentication and user account schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class UserLogin(BaseModel):
    """Login request schema."""

    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., description="User password")


class Token(BaseModel):
    """JWT token response schema."""

    token: str = Field(..., description="JWT access token")


class ChangePassword(BaseModel):
    """Change password request schema."""

    password: str = Field(..., min_length=8, max_length=128, description="New password")


class UserCreate(BaseModel):
    """Admin user creation schema."""

    username: str = Field(..., min_length=3, max_length=155, pattern=r"^[A-Za-z0-9_.-]+$")
    password: str = Field(..., min_length=8, max_length=128)
    is_superuser: bool = False


class UserDTO(BaseModel):
    """User response schema."""

    id: str
    username: str
    is_active: bool
    is_superuser: bool
    last_login: datetime | None = None

    model_config = {"from_attributes": True}
