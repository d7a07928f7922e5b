"""Database package: engine, session factory, base."""

from app.db.session import create_engine_for_url, create_session_maker

__all__ = ["create_engine_for_url", "create_session_maker"]
