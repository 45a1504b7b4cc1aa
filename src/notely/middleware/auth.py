"""Authentication middleware.

Resolves the acting user for a request:
1. bearer token from the Authorization header
2. token signature and expiry
3. token subject looked up in the user store
4. user attached to request.state.user
"""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings, get_settings
from ..core.exceptions import Unauthorized
from ..core.models.user import User
from ..core.repositories.user_repository import UserRepository
from ..database import get_db_session
from ..security import get_user_id_from_token


class JWTBearer(HTTPBearer):
    """JWT Bearer token authentication.

    With auto_error=False a request without an Authorization header yields
    None instead of failing; a header that is present but malformed is
    always rejected.
    """

    def __init__(self, auto_error: bool = True):
        # errors are raised here as Unauthorized, not by HTTPBearer
        super(JWTBearer, self).__init__(auto_error=False)
        self.required = auto_error

    async def __call__(self, request: Request) -> Optional[UUID]:
        if not request.headers.get("Authorization"):
            if self.required:
                raise Unauthorized("token missing or invalid")
            return None

        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if not credentials or credentials.scheme.lower() != "bearer" or not credentials.credentials:
            raise Unauthorized("token missing or invalid")

        return get_user_id_from_token(credentials.credentials)


_optional_bearer = JWTBearer(auto_error=False)


async def _resolve_user(request: Request, user_id: UUID, session: AsyncSession) -> User:
    user = await UserRepository(session).get_by_id(user_id)
    if not user:
        raise Unauthorized("token invalid")
    request.state.user = user
    return user


async def get_current_user(
    request: Request,
    user_id: UUID = Depends(JWTBearer()),
    session: AsyncSession = Depends(get_db_session),
) -> User:
    """Authenticated user; any failure is a 401."""
    return await _resolve_user(request, user_id, session)


async def get_optional_user(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> Optional[User]:
    """Acting user for update and delete.

    Only resolved when strict note ownership is on. Otherwise a presented
    token is not read at all.
    """
    request.state.user = None
    if not settings.strict_note_ownership:
        return None

    user_id = await _optional_bearer(request)
    if user_id is None:
        return None
    return await _resolve_user(request, user_id, session)
