"""Shared fixtures: a fresh SQLite database and service bundle per test."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from herbtrace.database import build_session_factory, create_tables, get_database_url
from herbtrace.dependencies import build_services, get_services
from herbtrace.main import app

AUTHORITY = "0xAuthority"
OUTSIDER = "0xOutsider"


@pytest.fixture
async def services(tmp_path):
    """Service bundle over a temporary database, authority = AUTHORITY."""
    engine = create_async_engine(get_database_url(tmp_path / "herbtrace-test.db"))
    await create_tables(engine)
    bundle = build_services(build_session_factory(engine))
    await bundle.initialize(AUTHORITY)
    yield bundle
    await engine.dispose()


@pytest.fixture
async def client(services):
    """HTTP client bound to the app, with the app using the test services."""
    app.dependency_overrides[get_services] = lambda: services
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()
