"""KeyValueEntry model — one row per storage key, value kept as raw JSON text."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class KeyValueEntry(Base):
    """A single key in the persistent key-value store.

    The value is stored as text rather than a JSON column so that corrupt
    payloads survive the round-trip and can be detected by the reader.
    """

    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
