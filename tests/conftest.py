import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.models.base import Base
from app.models.room import Room  # noqa: F401
from app.models.user import User
from app.core.security import create_access_token, hash_password
from app.schemas.auth import CallerIdentity

DATABASE_URL = "sqlite+aiosqlite:///:memory:"
PASSWORD = "password123"

@pytest.fixture
async def async_session():
    engine = create_async_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async_session_factory = sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    async with async_session_factory() as session:
        yield session
    await engine.dispose()

@pytest.fixture
def make_user(async_session):
    async def _make_user(username: str, password: str = PASSWORD) -> User:
        user = User(username=username, hashed_password=hash_password(password))
        async_session.add(user)
        await async_session.commit()
        await async_session.refresh(user)
        return user
    return _make_user

@pytest.fixture
async def test_user(make_user):
    return await make_user("testuser")

@pytest.fixture
async def alice(make_user):
    return await make_user("alice")

@pytest.fixture
async def bob(make_user):
    return await make_user("bobby")

@pytest.fixture
async def carol(make_user):
    return await make_user("carol")

def _identity_for(user: User) -> CallerIdentity:
    return CallerIdentity(user_id=user.id, username=user.username)

@pytest.fixture
def identity_for():
    return _identity_for

@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(_identity_for(user))}"}
    return _auth_headers

@pytest.fixture
def test_token(test_user):
    return create_access_token(_identity_for(test_user))

@pytest.fixture
async def client(async_session):
    from app.main import app
    from app.database.postgres import get_db_session

    async def _override():
        yield async_session
    app.dependency_overrides[get_db_session] = _override
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
