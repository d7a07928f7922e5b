"""Account directory and active session.

The directory (all registered accounts) and the active session are each a
single key in the key-value store. Passwords are compared in cleartext; this
is a local mock backend, not an authentication system.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Optional
from urllib.parse import quote

from pydantic import TypeAdapter, ValidationError

from app.core.constants import (
    AVATAR_BASE_URL,
    DEMO_ACCOUNT_AVATAR,
    DEMO_ACCOUNT_EMAIL,
    DEMO_ACCOUNT_ID,
    DEMO_ACCOUNT_NAME,
    DEMO_ACCOUNT_PASSWORD,
)
from app.core.exceptions import (
    DuplicateAccountError,
    InvalidCredentialsError,
    MalformedSessionError,
)
from app.schemas.account import Account, ActiveSession
from app.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

_accounts_adapter = TypeAdapter(list[Account])

# Characters encodeURIComponent leaves unescaped besides the quote() defaults
_URI_SAFE = "!'()*"


def avatar_url(name: str) -> str:
    """Generated avatar for a new account (random background)."""
    return f"{AVATAR_BASE_URL}?name={quote(name, safe=_URI_SAFE)}&background=random"


def demo_account() -> Account:
    return Account(
        id=DEMO_ACCOUNT_ID,
        name=DEMO_ACCOUNT_NAME,
        email=DEMO_ACCOUNT_EMAIL,
        password=DEMO_ACCOUNT_PASSWORD,
        avatar=DEMO_ACCOUNT_AVATAR,
    )


def decode_session(raw: str) -> ActiveSession:
    """Parse a persisted session. Raises MalformedSessionError on bad JSON or shape."""
    try:
        return ActiveSession.model_validate_json(raw)
    except ValidationError as e:
        raise MalformedSessionError(str(e)) from e


class AccountDirectory:
    """Registered accounts plus the single process-wide active session."""

    def __init__(
        self,
        store: KeyValueStore,
        accounts_key: str,
        session_key: str,
        latency: float = 0.0,
    ) -> None:
        self._store = store
        self._accounts_key = accounts_key
        self._session_key = session_key
        self._latency = latency
        self._session: Optional[ActiveSession] = None
        # Serializes check-then-insert on the directory key
        self._lock = asyncio.Lock()

    # ── Directory ────────────────────────────────────────────────────────

    async def list_accounts(self) -> list[Account]:
        raw = await self._store.get(self._accounts_key)
        if raw is None:
            return []
        return _accounts_adapter.validate_json(raw)

    async def _write_accounts(self, accounts: list[Account]) -> None:
        await self._store.set(self._accounts_key, _accounts_adapter.dump_json(accounts).decode())

    async def bootstrap_demo_account(self) -> bool:
        """Seed the demo account if the directory key has never been written.

        An existing directory, even an empty one, is left alone. Returns True
        when the demo account was created.
        """
        async with self._lock:
            if await self._store.contains(self._accounts_key):
                return False
            await self._write_accounts([demo_account()])
        logger.info("Seeded demo account %s", DEMO_ACCOUNT_EMAIL)
        return True

    # ── Session ──────────────────────────────────────────────────────────

    def get_active_session(self) -> Optional[ActiveSession]:
        return self._session

    async def _set_session(self, session: ActiveSession) -> None:
        await self._store.set(self._session_key, session.model_dump_json())
        self._session = session

    async def restore_session(self) -> Optional[ActiveSession]:
        """Load the persisted session at startup. Corrupt data is discarded, never raised."""
        raw = await self._store.get(self._session_key)
        if raw is None:
            self._session = None
            return None
        try:
            self._session = decode_session(raw)
        except MalformedSessionError as e:
            logger.warning("Discarding persisted session: %s", e.reason)
            await self._store.delete(self._session_key)
            self._session = None
        return self._session

    async def logout(self) -> None:
        """Clear the active session. Safe to call when nobody is logged in."""
        previous = self._session
        self._session = None
        await self._store.delete(self._session_key)
        if previous is not None:
            logger.info("Logged out account %s", previous.id)

    # ── Auth operations ──────────────────────────────────────────────────

    async def _simulate_latency(self) -> None:
        if self._latency > 0:
            await asyncio.sleep(self._latency)

    async def register(self, name: str, email: str, password: str) -> ActiveSession:
        """Create an account and log it in. Raises DuplicateAccountError if the email is taken."""
        await self._simulate_latency()
        async with self._lock:
            accounts = await self.list_accounts()
            if any(a.email == email for a in accounts):
                raise DuplicateAccountError(email)
            account = Account(
                id=uuid.uuid4().hex,
                name=name,
                email=email,
                password=password,
                avatar=avatar_url(name),
            )
            accounts.append(account)
            await self._write_accounts(accounts)
        session = account.to_session()
        await self._set_session(session)
        logger.info("Registered account %s", account.id)
        return session

    async def login(self, email: str, password: str) -> ActiveSession:
        """Raises InvalidCredentialsError unless email and password both match exactly."""
        await self._simulate_latency()
        accounts = await self.list_accounts()
        found = next(
            (a for a in accounts if a.email == email and a.password == password),
            None,
        )
        if found is None:
            raise InvalidCredentialsError()
        session = found.to_session()
        await self._set_session(session)
        logger.info("Logged in account %s", found.id)
        return session
