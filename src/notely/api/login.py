"""Login API endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.auth import LoginRequest, LoginResponse
from ..core.schemas.common import ErrorResponse
from ..core.services import AuthService
from ..database import get_db_session

router = APIRouter(prefix="/login", tags=["authentication"])


@router.post("", response_model=LoginResponse, responses={401: {"model": ErrorResponse}})
async def login(request: LoginRequest, session: AsyncSession = Depends(get_db_session)):
    """Login user and get a bearer token."""
    auth_service = AuthService(session)
    return await auth_service.login(request)
