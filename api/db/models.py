"""SQLAlchemy models for users and their task cards.

Attributes are snake_case; the physical column names keep the camelCase used
on the wire (``cardId``, ``userId``, ``createdAt``...).
"""
from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from .session import Base

# SQLite (and BIGINT columns elsewhere) hold signed 64-bit ids
MAX_ROW_ID = 2**63 - 1


def fits_row_id(value: int | None) -> bool:
    """False for ids no row can have; the driver would raise OverflowError on them."""
    return value is None or -MAX_ROW_ID - 1 <= value <= MAX_ROW_ID


class User(Base):
    __tablename__ = "users"

    user_id = Column("userId", Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, nullable=False)
    password = Column(Text, nullable=False)
    created_at = Column("createdAt", String(32), nullable=True)
    updated_at = Column("updatedAt", String(32), nullable=True)

    def __repr__(self) -> str:
        return f"<User(user_id={self.user_id}, email={self.email})>"


class Card(Base):
    __tablename__ = "cards"

    card_id = Column("cardId", Integer, primary_key=True, autoincrement=True)
    user_id = Column("userId", Integer, ForeignKey("users.userId"), nullable=True, index=True)
    title = Column(String(255), nullable=True)
    content = Column(Text, nullable=True)
    status = Column(String(16), nullable=True, index=True)
    created_at = Column("createdAt", String(32), nullable=True)
    updated_at = Column("updatedAt", String(32), nullable=True)

    # owner exposed as "userCard"; joined on every load (get, select, refresh)
    user_card = relationship("User", lazy="joined")

    def __repr__(self) -> str:
        return f"<Card(card_id={self.card_id}, user_id={self.user_id}, status={self.status})>"
