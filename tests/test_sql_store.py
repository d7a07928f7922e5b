"""SQL key-value store against a temporary SQLite file."""

from __future__ import annotations

import pytest

from app.core.config import Settings
from app.schemas.profile import ProfileUpdate
from app.services.container import AppServices
from app.storage import InMemoryKeyValueStore, SqlKeyValueStore, create_store


@pytest.fixture()
async def sql_store(tmp_path):
    store = SqlKeyValueStore(f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}")
    await store.start()
    yield store
    await store.close()


class TestSqlKeyValueStore:
    @pytest.mark.asyncio
    async def test_get_missing(self, sql_store):
        assert await sql_store.get("nope") is None
        assert not await sql_store.contains("nope")

    @pytest.mark.asyncio
    async def test_set_overwrite_delete(self, sql_store):
        await sql_store.set("k", '{"a": 1}')
        assert await sql_store.get("k") == '{"a": 1}'
        await sql_store.set("k", "[]")
        assert await sql_store.get("k") == "[]"
        await sql_store.delete("k")
        assert await sql_store.get("k") is None

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self, sql_store):
        await sql_store.delete("never-written")

    @pytest.mark.asyncio
    async def test_use_before_start_fails(self, tmp_path):
        store = SqlKeyValueStore(f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}")
        with pytest.raises(RuntimeError):
            await store.get("k")


class TestPersistenceAcrossRestarts:
    @pytest.mark.asyncio
    async def test_session_and_profile_survive_restart(self, tmp_path):
        settings = Settings(
            _env_file=None,
            storage_backend="sql",
            database_url=f"sqlite:///{tmp_path / 'fitpro.db'}",
        )
        first = AppServices.from_settings(settings)
        await first.start()
        session = await first.accounts.register("Ana", "ana@example.com", "secret1")
        await first.profiles.save_profile(session.id, ProfileUpdate(weight=70, height=175, age=30))
        await first.close()

        second = AppServices.from_settings(settings)
        await second.start()
        try:
            assert second.accounts.get_active_session() == session
            profile = await second.profiles.get_profile(session.id)
            assert profile.daily_calories == 2301
            # Demo account was seeded on first start only, before registration
            emails = [a.email for a in await second.accounts.list_accounts()]
            assert emails == ["demo@fitpro.com", "ana@example.com"]
        finally:
            await second.close()


class TestCreateStore:
    def test_memory_backend(self):
        assert isinstance(create_store(Settings(_env_file=None, storage_backend="memory")), InMemoryKeyValueStore)

    def test_sql_backend(self):
        assert isinstance(create_store(Settings(_env_file=None, storage_backend="sql")), SqlKeyValueStore)

    def test_url_normalization(self):
        settings = Settings(_env_file=None, database_url="postgres://u:p@db:5432/fitpro")
        assert settings.async_database_url == "postgresql+asyncpg://u:p@db:5432/fitpro"
        assert settings.sync_database_url == "postgresql://u:p@db:5432/fitpro"
        sqlite = Settings(_env_file=None, database_url="sqlite:///./x.db")
        assert sqlite.async_database_url == "sqlite+aiosqlite:///./x.db"
        assert sqlite.sync_database_url == "sqlite:///./x.db"
