"""
Persistence adapters.

Each repository wraps the SQLAlchemy calls for one entity. Services depend on
these classes instead of touching sessions and queries directly.
"""

from .card_repository import CardRepository
from .user_repository import UserRepository

__all__ = ["CardRepository", "UserRepository"]
