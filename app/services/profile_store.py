"""Profile metrics store — per-account profiles with derived health metrics.

All profiles live under one key as a JSON object mapping account id to
profile record. Every save merges, recomputes metrics, and writes the whole
mapping back.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from pydantic import TypeAdapter

from app.schemas.profile import Profile, ProfileUpdate
from app.services.health_metrics import apply_metrics
from app.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

_profiles_adapter = TypeAdapter(dict[str, Profile])


def merge_profile(account_id: str, current: Optional[Profile], update: ProfileUpdate) -> Profile:
    """Merge explicitly-set update fields onto current (or an empty record).

    id is forced to account_id and updated_at to now; metrics are not touched here.
    """
    base = current.model_dump() if current else {}
    base.update(update.model_dump(exclude_unset=True))
    base["id"] = account_id
    base["updated_at"] = datetime.now(timezone.utc)
    return Profile.model_validate(base)


class ProfileStore:
    def __init__(
        self,
        store: KeyValueStore,
        profiles_key: str,
        read_latency: float = 0.0,
        write_latency: float = 0.0,
    ) -> None:
        self._store = store
        self._profiles_key = profiles_key
        self._read_latency = read_latency
        self._write_latency = write_latency
        # Serializes read-merge-write on the shared profile database key
        self._lock = asyncio.Lock()

    async def _load_all(self) -> dict[str, Profile]:
        raw = await self._store.get(self._profiles_key)
        if raw is None:
            return {}
        return _profiles_adapter.validate_json(raw)

    async def get_profile(self, account_id: str) -> Optional[Profile]:
        """Stored profile for the account, or None if it was never saved."""
        if self._read_latency > 0:
            await asyncio.sleep(self._read_latency)
        profiles = await self._load_all()
        return profiles.get(account_id)

    async def save_profile(
        self,
        account_id: str,
        update: ProfileUpdate,
        seed: Optional[ProfileUpdate] = None,
    ) -> Profile:
        """Merge update, recompute BMI / status / calories, persist and return the record.

        seed supplies defaults (e.g. the account name and email) used only when
        no profile exists yet; fields set on update still win.
        """
        if self._write_latency > 0:
            await asyncio.sleep(self._write_latency)
        async with self._lock:
            profiles = await self._load_all()
            current = profiles.get(account_id)
            if current is None and seed is not None:
                current = merge_profile(account_id, None, seed)
            merged = apply_metrics(merge_profile(account_id, current, update))
            profiles[account_id] = merged
            await self._store.set(
                self._profiles_key, _profiles_adapter.dump_json(profiles).decode()
            )
        logger.info("Saved profile %s (bmi=%s)", account_id, merged.bmi)
        return merged
