"""Database helpers (engine/session and ORM models)."""

from .session import Base, get_engine, get_session, transaction
from .models import Card, User

__all__ = ["Base", "Card", "User", "get_engine", "get_session", "transaction"]
