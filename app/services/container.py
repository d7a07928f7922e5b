"""Service container: built at startup, closed at shutdown."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.core.config import Settings
from app.services.account_directory import AccountDirectory
from app.services.profile_store import ProfileStore
from app.storage import KeyValueStore, create_store

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    store: KeyValueStore
    accounts: AccountDirectory
    profiles: ProfileStore

    @classmethod
    def from_settings(cls, settings: Settings, store: KeyValueStore | None = None) -> AppServices:
        store = store or create_store(settings)
        return cls(
            store=store,
            accounts=AccountDirectory(
                store,
                accounts_key=settings.accounts_key,
                session_key=settings.session_key,
                latency=settings.auth_latency,
            ),
            profiles=ProfileStore(
                store,
                profiles_key=settings.profiles_key,
                read_latency=settings.profile_read_latency,
                write_latency=settings.profile_write_latency,
            ),
        )

    async def start(self, seed_demo: bool = True) -> None:
        """Open storage, seed the demo account on first run, restore any saved session."""
        await self.store.start()
        if seed_demo:
            await self.accounts.bootstrap_demo_account()
        session = await self.accounts.restore_session()
        if session:
            logger.info("Restored session for account %s", session.id)

    async def close(self) -> None:
        await self.store.close()
