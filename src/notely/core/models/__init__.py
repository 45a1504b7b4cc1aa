"""
Database models for the Notely application.

SQLAlchemy ORM models defining the schema. Both are used through the
repository layer with async sessions.

Models included:
    - User: account with a unique username and an index of owned notes
    - Note: content record with an importance flag and one owner
"""

from .base import BaseModel
from .note import Note
from .types import GUID, GUIDListType, parse_guid
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
    "GUID",
    "GUIDListType",
    "parse_guid",
]
