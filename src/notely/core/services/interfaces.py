"""
Service interfaces for the Notely application.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

from ..models.user import User
from ..schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from ..schemas.common import HealthCheckResponse
from ..schemas.notes import NoteResponse


class IUserService(ABC):
    """User store operations."""

    @abstractmethod
    async def create_user(self, username: Optional[str], name: Optional[str], password: Optional[str]) -> User:
        """Hash the password and persist a new user."""
        pass

    @abstractmethod
    async def register_user(self, request: RegisterRequest) -> UserResponse:
        """Create a user from an API request."""
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> User:
        """Get a user by username or raise NotFound."""
        pass

    @abstractmethod
    async def list_users(self) -> List[UserResponse]:
        """All users, without credentials."""
        pass

    @abstractmethod
    async def rebuild_note_index(self, user_id: UUID) -> User:
        """Recompute a user's note index from the note rows."""
        pass


class IAuthService(ABC):
    """Credential checks."""

    @abstractmethod
    async def login(self, request: LoginRequest) -> LoginResponse:
        """Trade username and password for a bearer token."""
        pass


class INoteService(ABC):
    """Note CRUD with ownership rules."""

    @abstractmethod
    async def list_notes(self) -> List[NoteResponse]:
        """All notes."""
        pass

    @abstractmethod
    async def get_note(self, note_id: str) -> NoteResponse:
        """One note by id."""
        pass

    @abstractmethod
    async def create_note(self, acting_user: Optional[User], content: Optional[str], important: bool = False) -> NoteResponse:
        """Create a note owned by the acting user."""
        pass

    @abstractmethod
    async def update_note(self, note_id: str, patch: Dict[str, Any], acting_user: Optional[User] = None) -> NoteResponse:
        """Partially update a note."""
        pass

    @abstractmethod
    async def delete_note(self, note_id: str, acting_user: Optional[User] = None) -> None:
        """Delete a note; absent notes are not an error."""
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Overall health."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Database connectivity."""
        pass
