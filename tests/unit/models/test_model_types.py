import uuid

import pytest
from sqlalchemy.dialects import postgresql, sqlite

from notely.core.exceptions import InvalidId
from notely.core.models import GUID, GUIDListType, Note, User, parse_guid


def test_parse_guid_accepts_uuid_and_string():
    value = uuid.uuid4()
    assert parse_guid(value) is value
    assert parse_guid(str(value)) == value


@pytest.mark.parametrize("bad", ["", "abc", "5a3d5da59070081a82a3445", None, 12])
def test_parse_guid_rejects_malformed(bad):
    with pytest.raises(InvalidId):
        parse_guid(bad)


def test_guid_sqlite_roundtrip():
    t = GUID()
    dialect = sqlite.dialect()
    value = uuid.uuid4()
    stored = t.process_bind_param(value, dialect)
    assert stored == str(value)
    assert t.process_result_value(stored, dialect) == value
    assert t.process_bind_param(None, dialect) is None


def test_guid_postgres_keeps_uuid():
    t = GUID()
    value = uuid.uuid4()
    assert t.process_bind_param(str(value), postgresql.dialect()) == value


def test_guid_list_sqlite_keeps_order():
    t = GUIDListType()
    dialect = sqlite.dialect()
    ids = [uuid.uuid4() for _ in range(3)]
    stored = t.process_bind_param(ids, dialect)
    assert isinstance(stored, str)
    assert t.process_result_value(stored, dialect) == ids
    assert t.process_result_value("[]", dialect) == []


def test_note_ownership_check():
    owner = uuid.uuid4()
    note = Note(content="x", user_id=owner)
    assert note.is_owned_by(owner)
    assert not note.is_owned_by(uuid.uuid4())
