"""Authentication service implementation."""

from sqlalchemy.ext.asyncio import AsyncSession

from ...security import create_access_token, verify_password
from ..exceptions import Unauthorized
from ..logging import get_logger
from ..repositories.user_repository import UserRepository
from ..schemas.auth import LoginRequest, LoginResponse
from .interfaces import IAuthService

logger = get_logger("services.auth")


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    async def login(self, request: LoginRequest) -> LoginResponse:
        """Login user and return a bearer token."""
        user = await self.user_repo.get_by_username(request.username)

        # same answer for unknown user and wrong password
        if not user or not verify_password(request.password, user.password_hash):
            logger.warning("Failed login", extra={"username": request.username})
            raise Unauthorized("invalid username or password")

        token = create_access_token(data={"sub": str(user.id), "username": user.username})
        logger.info("User logged in", extra={"user_id": str(user.id)})

        return LoginResponse(token=token, username=user.username, name=user.name)
