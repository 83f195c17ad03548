"""Shared fixtures.

The settings are read at import time, so the test database URL is
exported before anything from ``movieshelf`` is imported.  Each test
gets fresh tables in a temporary SQLite file seeded with two
categories: ``Action`` (id 1) and ``Drama`` (id 2).
"""

import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="movieshelf-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'movieshelf-test.db')}"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import httpx
import pytest
from fastapi.testclient import TestClient

from movieshelf.database import Base, SessionLocal, engine
from movieshelf.db.seed import seed_categories
from movieshelf.main import app as api_app
from movieshelf.models import Director, Movie
from movieshelf.web.client import ApiClient
from movieshelf.web.main import app as web_app, get_api_client

ACTION = 1
DRAMA = 2


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed_categories(session, ["Action", "Drama"])
    finally:
        session.close()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    """A session for repository tests. Do not hold it open across API calls."""
    session = SessionLocal()
    yield session
    session.close()


def count_rows(model) -> int:
    session = SessionLocal()
    try:
        return session.query(model).count()
    finally:
        session.close()


def director_names() -> list:
    session = SessionLocal()
    try:
        return [d.director for d in session.query(Director).order_by(Director.id)]
    finally:
        session.close()


@pytest.fixture
def row_counts():
    """Callable returning (movies, directors) as currently stored"""
    return lambda: (count_rows(Movie), count_rows(Director))


@pytest.fixture
def api():
    """Client for the API service (lifespan not run; tables come from ``tables``)"""
    return TestClient(api_app)


@pytest.fixture
def web():
    """Client for the front-end, wired to the API app in-process"""

    async def in_process_api():
        client = ApiClient(
            base_url="http://api.test",
            transport=httpx.ASGITransport(app=api_app),
        )
        try:
            yield client
        finally:
            await client.aclose()

    web_app.dependency_overrides[get_api_client] = in_process_api
    yield TestClient(web_app)
    web_app.dependency_overrides.pop(get_api_client, None)


@pytest.fixture
def web_offline():
    """Front-end whose API is unreachable"""

    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def unreachable_api():
        client = ApiClient(
            base_url="http://api.test",
            transport=httpx.MockTransport(refuse),
        )
        try:
            yield client
        finally:
            await client.aclose()

    web_app.dependency_overrides[get_api_client] = unreachable_api
    yield TestClient(web_app)
    web_app.dependency_overrides.pop(get_api_client, None)
