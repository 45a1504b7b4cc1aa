"""Custom SQLAlchemy types with cross-DB support, plus id parsing."""

import json
import uuid
from typing import Any, List, Optional

from sqlalchemy import String, Text, TypeDecorator

from ..exceptions import InvalidId


def parse_guid(value: Any) -> uuid.UUID:
    """Parse a client-supplied identifier.

    Raises InvalidId when the value is not UUID syntax; whether a record
    with that id exists is the caller's concern.
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise InvalidId() from None


class GUID(TypeDecorator):
    """
    Platform-independent GUID/UUID type.

    - Uses PostgreSQL UUID type when available
    - Falls back to CHAR(36) storing hex string form on other DBs (e.g., SQLite)
    """

    impl = String(36)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            from sqlalchemy.dialects.postgresql import UUID as PG_UUID

            return dialect.type_descriptor(PG_UUID(as_uuid=True))
        return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "postgresql":
            return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))


class GUIDListType(TypeDecorator):
    """
    Ordered list of UUIDs:

    - On PostgreSQL: UUID[] column
    - On SQLite (and others): JSON text in a TEXT column

    Always returns List[uuid.UUID]. Assign a new list to persist changes,
    in-place mutation is not tracked.
    """

    cache_ok = True
    impl = Text

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            from sqlalchemy.dialects.postgresql import ARRAY
            from sqlalchemy.dialects.postgresql import UUID as PG_UUID

            return dialect.type_descriptor(ARRAY(PG_UUID(as_uuid=True)))
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value: Optional[List[Any]], dialect):
        if value is None:
            return None
        values = [v if isinstance(v, uuid.UUID) else uuid.UUID(str(v)) for v in value]
        if dialect.name == "postgresql":
            return values
        return json.dumps([str(v) for v in values])

    def process_result_value(self, value, dialect) -> Optional[List[uuid.UUID]]:
        if value is None:
            return None
        if isinstance(value, str):
            value = json.loads(value)
        return [v if isinstance(v, uuid.UUID) else uuid.UUID(str(v)) for v in value]
