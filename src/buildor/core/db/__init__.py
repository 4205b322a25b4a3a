"""Database utilities - engine and session."""

from src.buildor.core.db.engine import dispose_engine, get_engine, set_engine
from src.buildor.core.db.session import get_session

__all__ = [
    "dispose_engine",
    "get_engine",
    "set_engine",
    "get_session",
]
