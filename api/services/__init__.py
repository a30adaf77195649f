"""
High-level use cases for the Taskboard API.

Each service orchestrates a repository and the database transaction for one
entity (cards, users). Routers call these services instead of touching
sessions directly, and translate their results into HTTP responses.
"""

from .card_service import CardService
from .user_service import UserService

__all__ = ["CardService", "UserService"]
