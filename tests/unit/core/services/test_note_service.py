"""NoteService: ownership index upkeep and access control."""

import uuid

import pytest

from notely.core.exceptions import Forbidden, InvalidId, NotFound, Unauthorized, ValidationError
from notely.core.repositories import NoteRepository, UserRepository
from notely.core.services import note_service as ns
from notely.core.services.note_service import NoteService


@pytest.fixture
def strict_settings(test_settings):
    return test_settings.model_copy(update={"strict_note_ownership": True})


async def make_user(session, username):
    return await UserRepository(session).create_user(
        {"username": username, "name": username.title(), "password_hash": "h"}
    )


async def test_create_note_links_note_to_owner(test_session, test_settings):
    owner = await make_user(test_session, "owner")
    svc = NoteService(test_session, test_settings)

    created = await svc.create_note(owner, "hello", important=True)

    assert created.content == "hello"
    assert created.important is True
    assert created.user == str(owner.id)
    refreshed = await UserRepository(test_session).get_by_id(owner.id)
    assert [str(i) for i in refreshed.note_ids] == [created.id]


async def test_create_note_requires_user_and_content(test_session, test_settings):
    owner = await make_user(test_session, "owner")
    svc = NoteService(test_session, test_settings)

    with pytest.raises(Unauthorized):
        await svc.create_note(None, "hello")
    with pytest.raises(ValidationError):
        await svc.create_note(owner, None)
    with pytest.raises(ValidationError):
        await svc.create_note(owner, "   ")
    assert await NoteRepository(test_session).count_notes() == 0


async def test_create_note_rolls_back_when_index_update_fails(test_session, test_settings, monkeypatch):
    owner = await make_user(test_session, "owner")
    svc = NoteService(test_session, test_settings)

    async def boom(*args, **kwargs):
        raise RuntimeError("index write failed")

    monkeypatch.setattr(svc.user_repo, "append_note_id", boom)
    with pytest.raises(RuntimeError):
        await svc.create_note(owner, "never stored")

    assert await NoteRepository(test_session).count_notes() == 0


async def test_get_note_errors(test_session, test_settings):
    svc = NoteService(test_session, test_settings)
    with pytest.raises(InvalidId):
        await svc.get_note("not-an-id")
    with pytest.raises(NotFound):
        await svc.get_note(str(uuid.uuid4()))


async def test_list_notes(test_session, test_settings):
    owner = await make_user(test_session, "owner")
    svc = NoteService(test_session, test_settings)
    await svc.create_note(owner, "first")
    await svc.create_note(owner, "second")
    assert [n.content for n in await svc.list_notes()] == ["first", "second"]


async def test_update_is_open_without_strict_ownership(test_session, test_settings):
    owner = await make_user(test_session, "owner")
    svc = NoteService(test_session, test_settings)
    note = await svc.create_note(owner, "text")

    updated = await svc.update_note(note.id, {"important": True}, acting_user=None)
    assert updated.important is True
    assert updated.content == "text"


async def test_delete_prunes_owner_index_and_is_idempotent(test_session, test_settings):
    owner = await make_user(test_session, "owner")
    svc = NoteService(test_session, test_settings)
    keep = await svc.create_note(owner, "keep")
    gone = await svc.create_note(owner, "gone")

    await svc.delete_note(gone.id)
    await svc.delete_note(gone.id)

    refreshed = await UserRepository(test_session).get_by_id(owner.id)
    assert [str(i) for i in refreshed.note_ids] == [keep.id]
    assert [n.id for n in await svc.list_notes()] == [keep.id]


async def test_delete_malformed_id(test_session, test_settings):
    with pytest.raises(InvalidId):
        await NoteService(test_session, test_settings).delete_note("bad-id")


async def test_strict_ownership_requires_owner(test_session, strict_settings):
    owner = await make_user(test_session, "owner")
    other = await make_user(test_session, "other")
    svc = NoteService(test_session, strict_settings)
    note = await svc.create_note(owner, "mine")

    with pytest.raises(Unauthorized):
        await svc.update_note(note.id, {"important": True})
    with pytest.raises(Forbidden):
        await svc.update_note(note.id, {"important": True}, acting_user=other)
    with pytest.raises(Forbidden):
        await svc.delete_note(note.id, acting_user=other)

    updated = await svc.update_note(note.id, {"content": "still mine"}, acting_user=owner)
    assert updated.content == "still mine"
    await svc.delete_note(note.id, acting_user=owner)
    assert await svc.list_notes() == []


async def test_strict_delete_of_absent_note_needs_no_user(test_session, strict_settings):
    await NoteService(test_session, strict_settings).delete_note(str(uuid.uuid4()))


async def test_service_falls_back_to_global_settings(monkeypatch, test_settings):
    monkeypatch.setattr(ns, "get_settings", lambda: test_settings)
    assert NoteService(session=object()).settings is test_settings


async def test_create_note_keeps_ids_added_by_other_requests(test_db, test_settings):
    async with test_db.session() as session:
        owner = await make_user(session, "owner")

        async with test_db.session() as other:
            earlier = await NoteService(other, test_settings).create_note(owner, "from elsewhere")

        # owner still carries the index loaded before the other request committed
        created = await NoteService(session, test_settings).create_note(owner, "mine")

    async with test_db.session() as session:
        refreshed = await UserRepository(session).get_by_id(owner.id)
        assert [str(i) for i in refreshed.note_ids] == [earlier.id, created.id]
