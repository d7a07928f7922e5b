"""Shared fixtures for the test suite."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from app.main import create_application
from app.services.account_directory import AccountDirectory
from app.services.container import AppServices
from app.services.profile_store import ProfileStore
from app.storage.memory import InMemoryKeyValueStore


# ---------------------------------------------------------------------------
# In-memory storage (no database needed)
# ---------------------------------------------------------------------------

@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None, storage_backend="memory", log_level="WARNING")


@pytest.fixture()
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def accounts(store, settings) -> AccountDirectory:
    return AccountDirectory(store, accounts_key=settings.accounts_key, session_key=settings.session_key)


@pytest.fixture()
def profiles(store, settings) -> ProfileStore:
    return ProfileStore(store, profiles_key=settings.profiles_key)


@pytest.fixture()
async def services(store, settings) -> AppServices:
    services = AppServices.from_settings(settings, store=store)
    await services.start()
    yield services
    await services.close()


@pytest.fixture()
async def client(settings, services):
    # ASGITransport does not run the lifespan, so attach the started services directly
    app = create_application(settings)
    app.state.services = services
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
