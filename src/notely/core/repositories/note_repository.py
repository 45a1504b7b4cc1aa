"""Note repository for database operations."""

import logging
from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotFound, ValidationError
from ..models.note import Note
from ..models.types import parse_guid

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("content", "important")


def _require_content(content: Optional[str]) -> str:
    if content is None or not str(content).strip():
        raise ValidationError("content missing")
    return content


class NoteRepository:
    """Repository for note database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_note(self, note_data: dict, commit: bool = True) -> Note:
        """Create new note.

        With commit=False the row is only flushed so the caller can add more
        writes to the same transaction.
        """
        data = dict(note_data)
        data["content"] = _require_content(data.get("content"))
        data["important"] = bool(data.get("important") or False)
        if data.get("user_id") is None:
            raise ValidationError("note owner missing")

        seq = await self._next_seq()
        if seq is not None:
            data["seq"] = seq

        note = Note(**data)
        self.session.add(note)
        if commit:
            await self.session.commit()
            await self.session.refresh(note)
        else:
            await self.session.flush()
        return note

    async def _next_seq(self) -> Optional[int]:
        """Next insertion position where the backend has no sequence to draw from."""
        if self.session.get_bind().dialect.supports_sequences:
            return None
        result = await self.session.execute(select(func.coalesce(func.max(Note.seq), 0) + 1))
        return result.scalar_one()

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        """Get note by ID."""
        stmt = select(Note).where(Note.id == note_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_id(self, note_id: Any) -> Note:
        """Get note by a client-supplied id.

        Raises InvalidId for a malformed id and NotFound for a well-formed
        id with no row.
        """
        note = await self.get_by_id(parse_guid(note_id))
        if not note:
            raise NotFound("note not found")
        return note

    async def list_notes(self) -> List[Note]:
        """All notes in insertion order."""
        stmt = select(Note).order_by(Note.seq)
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def list_by_owner(self, user_id: UUID) -> List[Note]:
        """Notes owned by one user, in insertion order."""
        stmt = select(Note).where(Note.user_id == user_id).order_by(Note.seq)
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def count_notes(self) -> int:
        result = await self.session.execute(select(func.count(Note.id)))
        return result.scalar() or 0

    async def update_note(self, note_id: Any, update_data: dict) -> Note:
        """Partially update content and/or importance."""
        note = await self.find_by_id(note_id)
        return await self.apply_update(note, update_data)

    async def apply_update(self, note: Note, update_data: dict) -> Note:
        """Apply a patch to an already loaded note and commit."""
        for key, value in update_data.items():
            if key not in UPDATABLE_FIELDS or value is None:
                continue
            if key == "content":
                value = _require_content(value)
            setattr(note, key, value)

        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def delete_note(self, note_id: Any, commit: bool = True) -> Optional[Note]:
        """Delete a note if present.

        Returns the deleted note, or None when there was nothing to delete.
        A malformed id still raises InvalidId.
        """
        note = await self.get_by_id(parse_guid(note_id))
        if not note:
            logger.debug(f"Note {note_id} already absent")
            return None

        await self.remove(note, commit=commit)
        return note

    async def remove(self, note: Note, commit: bool = True) -> None:
        """Delete an already loaded note."""
        await self.session.delete(note)
        if commit:
            await self.session.commit()
        else:
            await self.session.flush()

    async def delete_all(self, commit: bool = True) -> int:
        """Remove every note. Returns the number of rows deleted."""
        result = await self.session.execute(delete(Note))
        if commit:
            await self.session.commit()
        return result.rowcount or 0
