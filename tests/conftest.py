"""Shared fixtures: an in-memory SQLite store per test."""
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from api.main import create_app
from catalog.models.db_models import Book  # noqa: F401  (registers the table)
from catalog.repository import BookRepository
from catalog.service import CatalogService
from core.config import Settings
from core.database import Database


def make_book(n: int, **overrides) -> dict:
    book = {
        "title": f"Book {n}",
        "author": f"Author {n}",
        "price": 10.0 + n,
        "description": f"Description {n}",
        "category": f"Category {n}",
    }
    book.update(overrides)
    return book


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url="sqlite+aiosqlite:///:memory:", log_level="WARNING")


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings)
    await db.connect()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def repository(database):
    async with database.session() as session:
        yield BookRepository(session)


@pytest.fixture
def service(repository) -> CatalogService:
    return CatalogService(repository)


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seed(client):
    """POST books through the API; returns the created records."""
    def _seed(*books: dict) -> list[dict]:
        created = []
        for book in books:
            response = client.post("/books", json=book)
            assert response.status_code == 201
            created.append(response.json()["book"])
        return created
    return _seed
