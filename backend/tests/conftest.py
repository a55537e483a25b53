import os
import tempfile
import uuid

# 테스트용 SQLite 파일 DB (앱 모듈 임포트 전에 설정해야 함)
_DB_PATH = os.path.join(tempfile.gettempdir(), f"character_manager_test_{uuid.uuid4().hex}.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["SECRET_KEY"] = "test-signing-key-that-is-long-enough-for-hs512-0123456789abcdef"

import httpx
import pytest
from sqlalchemy.exc import OperationalError

from character_manager.db.database import engine, Base, AsyncSessionLocal
from character_manager.db.models import user, character, lookup  # noqa: F401
from character_manager.db.seed import seed_reference_data
from character_manager.schemas.auth import UserDto
from character_manager.services import auth_service

TEST_PASSWORD = "Password1"


def pytest_sessionfinish(session, exitstatus):
    if os.path.exists(_DB_PATH):
        os.remove(_DB_PATH)


@pytest.fixture
async def prepared_db():
    """Fresh schema plus reference data for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSessionLocal() as session:
        await seed_reference_data(session)
    yield
    await engine.dispose()


@pytest.fixture
async def db_session(prepared_db):
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client(prepared_db):
    from character_manager.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def make_user(db_session, username="tester", password=TEST_PASSWORD):
    result = await auth_service.register_user(db_session, UserDto(username=username, password=password))
    assert result.is_success, result.error
    return result.value


async def login_headers(client, username="tester", password=TEST_PASSWORD):
    """Registers (if needed) and logs in through the API, returning bearer headers."""
    await client.post("/api/auth/register", json={"username": username, "password": password})
    res = await client.post("/api/auth/login", json={"username": username, "password": password})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['accessToken']}"}


async def raise_db_down(*args, **kwargs):
    """Stand-in for a session method while the database is unreachable."""
    raise OperationalError("SELECT 1", {}, Exception("db down"))
