# Note model for user content
import uuid

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, Sequence, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .types import GUID

# source of Note.seq where the backend has sequences
NOTE_SEQ = Sequence("notes_seq_seq")


class Note(BaseModel):
    """Note with content, an importance flag and one owner."""

    __tablename__ = "notes"

    content: Mapped[str] = mapped_column(Text, nullable=False)
    important: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # owner reference
    user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    # insertion order, independent of the clock
    seq: Mapped[int] = mapped_column(BigInteger, NOTE_SEQ, nullable=False)

    __table_args__ = (
        Index("idx_notes_user_id", "user_id"),
        Index("idx_notes_seq", "seq", unique=True),
    )

    def __repr__(self) -> str:
        truncated = self.content if len(self.content) <= 30 else (self.content[:30] + "...")
        return f"<Note(content='{truncated}', user_id={self.user_id})>"

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        """Check if this note is owned by the specified user."""
        return self.user_id == user_id
