"""Note service implementation."""

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import Settings, get_settings
from ..exceptions import Forbidden, Unauthorized, ValidationError
from ..logging import get_logger
from ..models.note import Note
from ..models.types import parse_guid
from ..models.user import User
from ..repositories.note_repository import NoteRepository
from ..repositories.user_repository import UserRepository
from ..schemas.notes import NoteResponse
from .interfaces import INoteService

logger = get_logger("services.notes")


class NoteService(INoteService):
    """Note service implementation.

    Ownership lives on Note.user_id. The owner's note_ids list is kept in
    step on create and delete but is never consulted for access decisions.
    """

    def __init__(self, session: AsyncSession, settings: Optional[Settings] = None):
        self.session = session
        self.note_repo = NoteRepository(session)
        # Used to maintain the owner's note index
        self.user_repo = UserRepository(session)
        self.settings = settings or get_settings()

    async def list_notes(self) -> List[NoteResponse]:
        """All notes in insertion order."""
        notes = await self.note_repo.list_notes()
        return [NoteResponse.from_model(note) for note in notes]

    async def get_note(self, note_id: str) -> NoteResponse:
        """Get note by ID.

        Malformed ids raise InvalidId (400), absent ones NotFound (404).
        """
        note = await self.note_repo.find_by_id(note_id)
        return NoteResponse.from_model(note)

    async def create_note(
        self, acting_user: Optional[User], content: Optional[str], important: bool = False
    ) -> NoteResponse:
        """Create a note owned by the acting user.

        The note insert and the owner index update share one transaction.
        """
        if acting_user is None:
            raise Unauthorized()
        if content is None or not content.strip():
            raise ValidationError("content missing")

        user_id = acting_user.id
        try:
            note = await self.note_repo.create_note(
                {"content": content, "important": important, "user_id": user_id},
                commit=False,
            )
            await self.user_repo.append_note_id(user_id, note.id, commit=False)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            logger.error("Note creation rolled back", extra={"user_id": str(user_id)}, exc_info=True)
            raise

        logger.info("Note created", extra={"note_id": str(note.id), "user_id": str(user_id)})
        return NoteResponse.from_model(note)

    async def update_note(
        self, note_id: str, patch: Dict[str, Any], acting_user: Optional[User] = None
    ) -> NoteResponse:
        """Partially update content and/or importance."""
        note = await self.note_repo.find_by_id(note_id)
        self._authorize_mutation(note, acting_user)

        updated = await self.note_repo.apply_update(note, patch)
        return NoteResponse.from_model(updated)

    async def delete_note(self, note_id: str, acting_user: Optional[User] = None) -> None:
        """Delete note. Deleting an absent note succeeds."""
        note = await self.note_repo.get_by_id(parse_guid(note_id))
        if note is None:
            return
        self._authorize_mutation(note, acting_user)

        try:
            await self.note_repo.remove(note, commit=False)
            await self.user_repo.remove_note_id(note.user_id, note.id, commit=False)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Note deleted", extra={"note_id": str(note.id)})

    def _authorize_mutation(self, note: Note, acting_user: Optional[User]) -> None:
        """Enforce ownership when strict mode is on; otherwise anyone may mutate."""
        if not self.settings.strict_note_ownership:
            return
        if acting_user is None:
            raise Unauthorized()
        if not note.is_owned_by(acting_user.id):
            raise Forbidden()
