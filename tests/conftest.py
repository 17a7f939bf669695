"""Shared pytest fixtures configured to use SQLite in-memory databases."""

import logging
import os
import tempfile
from io import BytesIO
from uuid import uuid4

# must be set before the notely settings object is created
_TMP_ROOT = tempfile.mkdtemp(prefix="notely-tests-")
os.environ["NOTELY_SKIP_LIFESPAN_DB"] = "1"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_DIR"] = os.path.join(_TMP_ROOT, "logs")
os.environ["STORAGE_ROOT"] = os.path.join(_TMP_ROOT, "storage")
os.environ["STORAGE_URL"] = "http://test/storage"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from PIL import Image  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from notely.config import get_settings  # noqa: E402
from notely.core import storage  # noqa: E402
from notely.core.models import BaseModel, User  # noqa: E402
from notely.database import get_db_session  # noqa: E402
from notely.main import app as fastapi_app  # noqa: E402
from notely.security.password import hash_password  # noqa: E402

# Silence verbose DEBUG logs from aiosqlite
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

TEST_PASSWORD = "password123"


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )

    # SQLite needs foreign keys switched on for ON DELETE CASCADE
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def blob_store(monkeypatch):
    """Blob store rooted where the app serves /storage from."""
    settings = get_settings()
    store = storage.LocalBlobStore(settings.storage_root, settings.storage_url)
    monkeypatch.setattr(storage, "_blob_store", store)
    return store


@pytest.fixture
def test_app(test_session, blob_store):
    """The FastAPI app wired to the test database."""

    async def _override_get_db():
        yield test_session

    fastapi_app.dependency_overrides[get_db_session] = _override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def user_payload():
    return {
        "name": "Test User",
        "email": f"user_{uuid4().hex[:8]}@example.com",
        "password": TEST_PASSWORD,
    }


@pytest.fixture
async def test_user(test_session, user_payload):
    """A user row created directly in the database."""
    user = User(
        name=user_payload["name"],
        email=user_payload["email"],
        password_hash=hash_password(user_payload["password"]),
    )
    test_session.add(user)
    await test_session.commit()
    await test_session.refresh(user)
    return user


async def register_user(client, name="Alice", email=None, password=TEST_PASSWORD):
    """Register through the API and return (user json, bearer headers)."""
    email = email or f"{name.lower()}_{uuid4().hex[:6]}@example.com"
    resp = await client.post(
        "/api/auth/register", json={"name": name, "email": email, "password": password}
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return body["user"], {"Authorization": f"Bearer {body['token']}"}


@pytest.fixture
def register():
    return register_user


def make_image(image_format="PNG", size=(4, 4)) -> bytes:
    """Encode a tiny solid-color image."""
    buf = BytesIO()
    Image.new("RGB", size, (200, 30, 30)).save(buf, format=image_format)
    return buf.getvalue()


@pytest.fixture
def png_bytes():
    return make_image("PNG")
