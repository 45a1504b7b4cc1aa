"""
User model for authentication.
"""

import uuid
from typing import List

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .types import GUIDListType


class User(BaseModel):
    """User account with username/password auth."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # secondary index of owned notes; Note.user_id is authoritative
    note_ids: Mapped[List[uuid.UUID]] = mapped_column(
        GUIDListType, nullable=False, default=lambda: []
    )

    __table_args__ = (
        CheckConstraint("length(username) <= 50", name="ck_users_username_len"),
        CheckConstraint("name IS NULL OR length(name) <= 100", name="ck_users_name_len"),
    )

    def __repr__(self) -> str:
        return f"<User(username='{self.username}')>"
