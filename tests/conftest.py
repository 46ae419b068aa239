import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from taskboard.database import Base, get_db
from taskboard.main import app
from taskboard.models import project, task, user  # noqa: F401
from tests.helpers import API, bearer, signup


@pytest_asyncio.fixture
async def session_factory():
    # One shared in-memory SQLite connection per test
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    await engine.dispose()


@pytest.fixture
def api_app(session_factory):
    async def override_get_db():
        async with session_factory() as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(api_app):
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def alice(client):
    body = await signup(client)
    return {"id": body["user"]["id"], "headers": bearer(body["token"]), "token": body["token"]}


@pytest_asyncio.fixture
async def bob(client):
    body = await signup(client, name="Bob", email="bob@example.com")
    return {"id": body["user"]["id"], "headers": bearer(body["token"]), "token": body["token"]}


@pytest_asyncio.fixture
async def project_id(client, alice):
    response = await client.post(
        f"{API}/projects",
        json={"name": "Website", "description": "Relaunch the marketing site"},
        headers=alice["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]
