"""User service implementation."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...security import hash_password
from ..exceptions import NotFound, ValidationError
from ..logging import get_logger
from ..models.user import User
from ..repositories.note_repository import NoteRepository
from ..repositories.user_repository import UserRepository
from ..schemas.auth import RegisterRequest, UserResponse
from .interfaces import IUserService

logger = get_logger("services.users")

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 3


class UserService(IUserService):
    """User service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        # Used to rebuild the note index from note rows
        self.note_repo = NoteRepository(session)

    async def create_user(
        self, username: Optional[str], name: Optional[str], password: Optional[str]
    ) -> User:
        """Hash the password and persist a new user with no notes."""
        if not username or len(username) < MIN_USERNAME_LENGTH:
            raise ValidationError(
                f"username must be at least {MIN_USERNAME_LENGTH} characters long"
            )
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        user = await self.user_repo.create_user(
            {
                "username": username,
                "name": name,
                "password_hash": hash_password(password),
                "note_ids": [],
            }
        )
        logger.info("User created", extra={"user_id": str(user.id), "username": user.username})
        return user

    async def register_user(self, request: RegisterRequest) -> UserResponse:
        """Create a user from a registration request."""
        user = await self.create_user(request.username, request.name, request.password)
        return UserResponse.from_model(user)

    async def find_by_username(self, username: str) -> User:
        user = await self.user_repo.get_by_username(username)
        if not user:
            raise NotFound("user not found")
        return user

    async def get_user(self, user_id: UUID) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFound("user not found")
        return user

    async def list_users(self) -> List[UserResponse]:
        users = await self.user_repo.list_users()
        return [UserResponse.from_model(user) for user in users]

    async def rebuild_note_index(self, user_id: UUID) -> User:
        """Recompute User.note_ids from the notes the user actually owns."""
        user = await self.get_user(user_id)
        notes = await self.note_repo.list_by_owner(user.id)
        return await self.user_repo.set_note_ids(user, [note.id for note in notes])
