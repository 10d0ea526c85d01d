"""Shared fixtures: in-memory SQLite store and an in-process HTTP client."""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from api.main import create_app
from core.config import Settings
from core.database import Database
from verticals.bookstore.repository import BookRepository
from verticals.bookstore.service import BookService

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def settings():
    return Settings(database_url=TEST_DATABASE_URL, log_level="DEBUG")


@pytest_asyncio.fixture
async def database(settings):
    db = Database.from_settings(settings)
    await db.create_tables()
    yield db
    await db.drop_tables()
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session_factory() as s:
        yield s


@pytest.fixture
def repository(session):
    return BookRepository(session)


@pytest.fixture
def service(repository):
    return BookService(repository)


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
