"""User repository for database operations."""

from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import DuplicateUsername, ValidationError
from ..models.user import User


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_user(self, user_data: dict) -> User:
        """Create new user.

        Username uniqueness is left to the unique constraint; a collision
        surfaces as DuplicateUsername.
        """
        data = dict(user_data)
        data.setdefault("note_ids", [])
        user = User(**data)
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if "unique" in str(e.orig).lower() or "duplicate" in str(e.orig).lower():
                raise DuplicateUsername() from e
            raise ValidationError(f"user rejected by store: {e.orig}") from e
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID."""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_update(self, user_id: UUID) -> Optional[User]:
        """Lock the user row and reload it, so the note index is current."""
        stmt = (
            select(User)
            .where(User.id == user_id)
            .with_for_update(key_share=True)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        stmt = select(User).where(User.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_users(self) -> List[User]:
        """All users in creation order."""
        stmt = select(User).order_by(User.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def count_users(self) -> int:
        result = await self.session.execute(select(func.count(User.id)))
        return result.scalar() or 0

    async def set_note_ids(self, user: User, note_ids: Iterable[UUID], commit: bool = True) -> User:
        """Replace the user's note index."""
        # assign a fresh list, in-place mutation is not tracked
        user.note_ids = list(note_ids)
        if commit:
            await self.session.commit()
            await self.session.refresh(user)
        else:
            await self.session.flush()
        return user

    async def append_note_id(self, user_id: UUID, note_id: UUID, commit: bool = True) -> Optional[User]:
        """Add a note id to the end of the owner's index, if the owner still exists."""
        user = await self.get_for_update(user_id)
        if not user:
            return None
        return await self.set_note_ids(user, [*(user.note_ids or []), note_id], commit=commit)

    async def remove_note_id(self, user_id: UUID, note_id: UUID, commit: bool = True) -> Optional[User]:
        """Drop a note id from the owner's index, if the owner still exists."""
        user = await self.get_for_update(user_id)
        if not user:
            return None
        remaining = [nid for nid in (user.note_ids or []) if nid != note_id]
        return await self.set_note_ids(user, remaining, commit=commit)

    async def delete_all(self, commit: bool = True) -> int:
        """Remove every user. Returns the number of rows deleted."""
        result = await self.session.execute(delete(User))
        if commit:
            await self.session.commit()
        return result.rowcount or 0
