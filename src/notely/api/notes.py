"""Notes API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings, get_settings
from ..core.models.user import User
from ..core.schemas.common import ErrorResponse
from ..core.schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from ..core.services import NoteService
from ..database import get_db_session
from ..middleware.auth import get_current_user, get_optional_user

router = APIRouter(prefix="/notes", tags=["notes"])

_errors = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.get("", response_model=List[NoteResponse])
async def list_notes(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
):
    """List all notes."""
    note_service = NoteService(session, settings)
    return await note_service.list_notes()


@router.get("/{note_id}", response_model=NoteResponse, responses=_errors)
async def get_note(
    note_id: str,
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
):
    """Get a specific note."""
    note_service = NoteService(session, settings)
    return await note_service.get_note(note_id)


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED, responses=_errors)
async def create_note(
    request: NoteCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
):
    """Create a new note owned by the authenticated user."""
    note_service = NoteService(session, settings)
    return await note_service.create_note(current_user, request.content, request.important)


@router.put("/{note_id}", response_model=NoteResponse, responses=_errors)
async def update_note(
    note_id: str,
    request: NoteUpdate,
    current_user: Optional[User] = Depends(get_optional_user),
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
):
    """Update a note."""
    note_service = NoteService(session, settings)
    return await note_service.update_note(note_id, request.to_patch(), current_user)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_errors)
async def delete_note(
    note_id: str,
    current_user: Optional[User] = Depends(get_optional_user),
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
):
    """Delete a note. Deleting a missing note is not an error."""
    note_service = NoteService(session, settings)
    await note_service.delete_note(note_id, current_user)
