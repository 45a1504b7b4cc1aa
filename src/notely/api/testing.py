"""Test-only endpoints, mounted when ENVIRONMENT=test."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.logging import get_logger
from ..core.repositories import NoteRepository, UserRepository
from ..database import get_db_session

router = APIRouter(prefix="/testing", tags=["testing"])

logger = get_logger("api.testing")


@router.post("/reset", status_code=status.HTTP_204_NO_CONTENT)
async def reset(session: AsyncSession = Depends(get_db_session)):
    """Delete every note and user."""
    notes = await NoteRepository(session).delete_all(commit=False)
    users = await UserRepository(session).delete_all(commit=False)
    await session.commit()
    logger.warning("Database reset", extra={"notes_deleted": notes, "users_deleted": users})
