import os

# Must be set before geosocial.config builds its settings
os.environ["ENVIRONMENT"] = "testing"

import pytest
from typing import AsyncGenerator, Dict
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from geosocial.main import app
from geosocial.db.session import get_db
from geosocial.models import Base
from geosocial.services.auth_service import AuthService
from geosocial.services.admin_policy import AdminPolicy, get_admin_policy
from geosocial.services.object_storage_service import ObjectStorageService, get_object_storage
from geosocial.services.redis_service import get_session_store

# Test database URL - in-memory SQLite
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_EMAIL = "admin@example.com"

@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()

@pytest.fixture
async def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

@pytest.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session"""
    async with session_factory() as session:
        yield session

@pytest.fixture
def object_storage(tmp_path) -> ObjectStorageService:
    return ObjectStorageService(
        root_dir=str(tmp_path / "objects"),
        base_url="http://test",
        api_prefix="/api/v1",
        max_upload_size=1024,
    )

@pytest.fixture
async def test_client(session_factory, object_storage) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client wired to the test database, storage and admin list"""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_admin_policy] = lambda: AdminPolicy([ADMIN_EMAIL])
    app.dependency_overrides[get_object_storage] = lambda: object_storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()

@pytest.fixture(autouse=True)
def reset_session_store():
    get_session_store().reset()
    yield
    get_session_store().reset()

def make_token(user_id: str, email: str, **claims) -> str:
    """Session token as the identity provider would issue it"""
    return AuthService(session_store=get_session_store()).create_access_token(
        {"sub": user_id, "email": email, **claims}
    )

def auth_headers(user_id: str, email: str, **claims) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id, email, **claims)}"}

@pytest.fixture
async def register(test_client: AsyncClient):
    """Sign a user in once so their row exists; returns their auth headers"""

    async def _register(user_id: str, email: str = None, **claims) -> Dict[str, str]:
        headers = auth_headers(user_id, email or f"{user_id}@example.com", **claims)
        response = await test_client.get("/api/v1/auth/user", headers=headers)
        assert response.status_code == 200
        return headers

    return _register

@pytest.fixture
async def alice(register):
    return await register("alice", first_name="Alice", last_name="Anders")

@pytest.fixture
async def bob(register):
    return await register("bob", first_name="Bob", last_name="Berg")

@pytest.fixture
async def admin(register):
    return await register("admin", ADMIN_EMAIL)

@pytest.fixture
def token_for():
    return make_token

@pytest.fixture
def headers_for():
    return auth_headers
