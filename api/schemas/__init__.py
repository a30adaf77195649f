"""Request/response models (camelCase on the wire)."""

from .cards import CardCreate, CardResponse, CardUpdate, UserPublic
from .users import LoginRequest, RecoveryRequest, UserCreate, UserResponse, UserUpdate

__all__ = [
    "CardCreate",
    "CardResponse",
    "CardUpdate",
    "LoginRequest",
    "RecoveryRequest",
    "UserCreate",
    "UserPublic",
    "UserResponse",
    "UserUpdate",
]
