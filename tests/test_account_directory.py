"""Account directory and session tests (in-memory storage)."""

from __future__ import annotations

import asyncio
import json

import pytest

from app.core.constants import DEMO_ACCOUNT_EMAIL, DEMO_ACCOUNT_ID, DEMO_ACCOUNT_PASSWORD
from app.core.exceptions import DuplicateAccountError, InvalidCredentialsError, MalformedSessionError
from app.schemas.account import ActiveSession
from app.services.account_directory import AccountDirectory, avatar_url, decode_session


def _fresh_directory(store, settings) -> AccountDirectory:
    """Simulates a process restart over the same storage."""
    return AccountDirectory(store, accounts_key=settings.accounts_key, session_key=settings.session_key)


class TestRegister:
    @pytest.mark.asyncio
    async def test_creates_account_and_session(self, accounts, store, settings):
        session = await accounts.register("Ana Pérez", "ana@example.com", "secret1")
        assert session.email == "ana@example.com"
        assert session.name == "Ana Pérez"
        assert accounts.get_active_session() == session

        stored = json.loads(store.snapshot()[settings.accounts_key])
        assert len(stored) == 1
        assert stored[0]["password"] == "secret1"
        assert stored[0]["id"] == session.id
        assert json.loads(store.snapshot()[settings.session_key])["id"] == session.id
        assert "password" not in store.snapshot()[settings.session_key]

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, accounts):
        a = await accounts.register("Ana", "ana@example.com", "secret1")
        b = await accounts.register("Ben", "ben@example.com", "secret2")
        assert a.id != b.id

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected_and_directory_unchanged(self, accounts, store, settings):
        await accounts.register("Ana", "ana@example.com", "secret1")
        before = store.snapshot()[settings.accounts_key]
        with pytest.raises(DuplicateAccountError):
            await accounts.register("Other", "ana@example.com", "another")
        assert store.snapshot()[settings.accounts_key] == before

    @pytest.mark.asyncio
    async def test_email_comparison_is_case_sensitive(self, accounts):
        await accounts.register("Ana", "ana@example.com", "secret1")
        session = await accounts.register("Ana Upper", "Ana@Example.com", "secret1")
        assert session.email == "Ana@Example.com"
        assert len(await accounts.list_accounts()) == 2

    @pytest.mark.asyncio
    async def test_concurrent_same_email_registers_once(self, store, settings):
        accounts = AccountDirectory(
            store,
            accounts_key=settings.accounts_key,
            session_key=settings.session_key,
            latency=0.01,
        )
        results = await asyncio.gather(
            accounts.register("Ana", "ana@example.com", "secret1"),
            accounts.register("Ana Two", "ana@example.com", "secret2"),
            return_exceptions=True,
        )
        errors = [r for r in results if isinstance(r, DuplicateAccountError)]
        sessions = [r for r in results if isinstance(r, ActiveSession)]
        assert len(errors) == 1
        assert len(sessions) == 1
        stored = await accounts.list_accounts()
        assert [a.email for a in stored] == ["ana@example.com"]
        assert stored[0].id == sessions[0].id

    def test_avatar_url_encodes_name(self):
        assert avatar_url("Jane Doe") == "https://ui-avatars.com/api/?name=Jane%20Doe&background=random"


class TestLogin:
    @pytest.mark.asyncio
    async def test_valid_credentials(self, accounts):
        registered = await accounts.register("Ana", "ana@example.com", "secret1")
        await accounts.logout()
        session = await accounts.login("ana@example.com", "secret1")
        assert session == registered
        assert accounts.get_active_session() == session

    @pytest.mark.asyncio
    async def test_wrong_password(self, accounts):
        await accounts.register("Ana", "ana@example.com", "secret1")
        await accounts.logout()
        with pytest.raises(InvalidCredentialsError):
            await accounts.login("ana@example.com", "wrong-pass")
        assert accounts.get_active_session() is None

    @pytest.mark.asyncio
    async def test_unknown_email(self, accounts):
        with pytest.raises(InvalidCredentialsError):
            await accounts.login("nobody@example.com", "secret1")

    @pytest.mark.asyncio
    async def test_email_case_must_match(self, accounts):
        await accounts.register("Ana", "ana@example.com", "secret1")
        with pytest.raises(InvalidCredentialsError):
            await accounts.login("ANA@example.com", "secret1")


class TestLogoutAndRestore:
    @pytest.mark.asyncio
    async def test_logout_is_idempotent(self, accounts):
        await accounts.logout()
        await accounts.logout()
        assert accounts.get_active_session() is None

    @pytest.mark.asyncio
    async def test_restore_after_login(self, accounts, store, settings):
        session = await accounts.register("Ana", "ana@example.com", "secret1")
        restarted = _fresh_directory(store, settings)
        assert await restarted.restore_session() == session
        assert restarted.get_active_session() == session

    @pytest.mark.asyncio
    async def test_logout_then_restore_yields_no_session(self, accounts, store, settings):
        await accounts.register("Ana", "ana@example.com", "secret1")
        await accounts.logout()
        restarted = _fresh_directory(store, settings)
        assert await restarted.restore_session() is None
        assert settings.session_key not in store.snapshot()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["{not json", "[]", '{"id": "x"}', "null"])
    async def test_malformed_session_discarded(self, accounts, store, settings, raw):
        await store.set(settings.session_key, raw)
        assert await accounts.restore_session() is None
        assert settings.session_key not in store.snapshot()

    def test_decode_session_raises_malformed(self):
        with pytest.raises(MalformedSessionError):
            decode_session("{oops")


class TestBootstrapDemoAccount:
    @pytest.mark.asyncio
    async def test_seeds_once(self, accounts):
        assert await accounts.bootstrap_demo_account() is True
        assert await accounts.bootstrap_demo_account() is False
        stored = await accounts.list_accounts()
        assert [a.id for a in stored] == [DEMO_ACCOUNT_ID]

    @pytest.mark.asyncio
    async def test_demo_login(self, accounts):
        await accounts.bootstrap_demo_account()
        session = await accounts.login(DEMO_ACCOUNT_EMAIL, DEMO_ACCOUNT_PASSWORD)
        assert session.name == "Demo User"
        assert session.avatar.endswith("background=ea580c&color=fff")

    @pytest.mark.asyncio
    async def test_existing_directory_untouched(self, accounts):
        await accounts.register("Ana", "ana@example.com", "secret1")
        assert await accounts.bootstrap_demo_account() is False
        emails = [a.email for a in await accounts.list_accounts()]
        assert emails == ["ana@example.com"]

    @pytest.mark.asyncio
    async def test_empty_directory_untouched(self, accounts, store, settings):
        await store.set(settings.accounts_key, "[]")
        assert await accounts.bootstrap_demo_account() is False
        assert store.snapshot()[settings.accounts_key] == "[]"
