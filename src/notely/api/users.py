"""User API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.auth import RegisterRequest, UserResponse
from ..core.schemas.common import ErrorResponse
from ..core.services import UserService
from ..database import get_db_session

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserResponse])
async def list_users(session: AsyncSession = Depends(get_db_session)):
    """List all users."""
    user_service = UserService(session)
    return await user_service.list_users()


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_user(request: RegisterRequest, session: AsyncSession = Depends(get_db_session)):
    """Register a new user."""
    user_service = UserService(session)
    return await user_service.register_user(request)
