"""
User and authentication schemas.

These define the API contracts for user registration, listing and login.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.user import User


class RegisterRequest(BaseModel):
    """User registration request schema."""

    username: str = Field(min_length=3, max_length=50, description="Unique username")
    name: Optional[str] = Field(default=None, max_length=100, description="Display name")
    password: str = Field(min_length=3, max_length=128, description="User password")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"username": "mluukkai", "name": "Matti Luukkainen", "password": "salainen"}
        }
    )


class LoginRequest(BaseModel):
    """User login request schema."""

    username: str = Field(description="Username")
    password: str = Field(description="User password")

    model_config = ConfigDict(
        json_schema_extra={"example": {"username": "root", "password": "sekret"}}
    )


class LoginResponse(BaseModel):
    """Bearer token issued on a successful login."""

    token: str = Field(description="JWT access token")
    username: str = Field(description="Username")
    name: Optional[str] = Field(default=None, description="Display name")


class UserResponse(BaseModel):
    """User representation. The password hash is never part of it."""

    id: str = Field(description="User unique identifier")
    username: str = Field(description="Username")
    name: Optional[str] = Field(default=None, description="Display name")
    notes: List[str] = Field(default_factory=list, description="Ids of notes owned by the user")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "username": "root",
                "name": "Superuser",
                "notes": ["456e7890-e89b-12d3-a456-426614174000"],
            }
        }
    )

    @classmethod
    def from_model(cls, user: User) -> "UserResponse":
        return cls(
            id=str(user.id),
            username=user.username,
            name=user.name,
            notes=[str(note_id) for note_id in (user.note_ids or [])],
        )
