"""Shared pytest fixtures configured to use SQLite in-memory for tests."""

import logging
import os
from uuid import uuid4

# keep test runs from writing rotating log files
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.pool import StaticPool

from notely.config import Settings, get_settings
from notely.core.models.note import Note
from notely.core.models.user import User
from notely.core.repositories import NoteRepository, UserRepository
from notely.core.services import UserService
from notely.database import Database
from notely.main import create_app
from notely.security.jwt import create_access_token

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

INITIAL_NOTES = [
    {"content": "HTML IS easy", "important": False},
    {"content": "Browser can execute only JavaScript", "important": True},
]


@pytest.fixture
def test_settings():
    """Settings for an in-memory SQLite database in the test environment."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        secret_key="test-secret-key",
        environment="test",
        skip_lifespan_db=True,
        log_to_file=False,
        debug=True,
    )


@pytest.fixture
async def test_db(test_settings):
    """Database handle on a fresh in-memory SQLite schema."""
    db = Database(
        test_settings.database_url,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )
    await db.connect()

    # Ensure SQLite enforces foreign key constraints
    @event.listens_for(db.engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    await db.create_tables()
    try:
        yield db
    finally:
        await db.disconnect()


@pytest.fixture
async def test_session(test_db):
    """Session bound to the test database."""
    async with test_db.session() as session:
        yield session


@pytest.fixture
def test_app(test_db, test_settings):
    """Test FastAPI app wired to the test database."""
    app = create_app(test_settings)
    app.state.db = test_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    """Async HTTP client talking to the app in-process."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def test_user_data():
    """Sample user data for testing."""
    return {
        "username": f"testuser_{uuid4().hex[:8]}",
        "password": "TestPassword123!",
        "name": "Test User",
    }


@pytest.fixture
async def test_user(test_db, test_user_data):
    """Create a test user in the database."""
    async with test_db.session() as session:
        user = await UserService(session).create_user(
            test_user_data["username"], test_user_data["name"], test_user_data["password"]
        )
    user.plain_password = test_user_data["password"]
    return user


@pytest.fixture
async def root_user(test_db):
    """The `root` user with password `sekret`."""
    async with test_db.session() as session:
        return await UserService(session).create_user("root", "Superuser", "sekret")


@pytest.fixture
def auth_headers(test_user):
    """Authorization header with a valid token for test_user."""
    token = create_access_token({"sub": str(test_user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def seeded_notes(test_db, root_user):
    """The two initial notes, owned by root, inserted in order."""
    created = []
    async with test_db.session() as session:
        note_repo = NoteRepository(session)
        user_repo = UserRepository(session)
        for data in INITIAL_NOTES:
            note = await note_repo.create_note({**data, "user_id": root_user.id})
            await user_repo.append_note_id(root_user.id, note.id)
            created.append(note)
    return created


async def notes_in_db(db: Database) -> list[Note]:
    async with db.session() as session:
        return await NoteRepository(session).list_notes()


async def users_in_db(db: Database) -> list[User]:
    async with db.session() as session:
        return await UserRepository(session).list_users()


async def non_existing_id(db: Database, owner: User) -> str:
    """Id of a note that existed briefly and was then removed."""
    async with db.session() as session:
        repo = NoteRepository(session)
        note = await repo.create_note({"content": "willremovethissoon", "user_id": owner.id})
        await repo.remove(note)
        return str(note.id)


@pytest.fixture
def helpers():
    """Database inspection helpers for API tests."""

    class Helpers:
        initial_notes = INITIAL_NOTES
        notes_in_db = staticmethod(notes_in_db)
        users_in_db = staticmethod(users_in_db)
        non_existing_id = staticmethod(non_existing_id)

    return Helpers
