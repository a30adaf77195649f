"""Data access for users backed by SQLAlchemy."""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from api.db.models import User, fits_row_id
from api.db.session import get_session

from .filters import EqualityFilter


class UserRepository:
    """CRUD helpers for users; same session conventions as CardRepository."""

    def create_user(self, fields: Mapping[str, Any], session: Session) -> User:
        entity = User(**dict(fields))
        session.add(entity)
        session.flush()
        session.refresh(entity)
        return entity

    def update_user(self, user_id: int, fields: Mapping[str, Any], session: Session) -> Optional[User]:
        if not fits_row_id(user_id):
            return None
        entity = session.get(User, user_id)
        if not entity:
            return None
        for key, value in fields.items():
            setattr(entity, key, value)
        session.flush()
        return entity

    def search_users(self, name: Optional[str] = None, email: Optional[str] = None) -> list[User]:
        criteria = EqualityFilter(User).add_if("name", name).add_if("email", email)
        stmt = select(User).where(criteria.compile()).order_by(User.user_id)
        with get_session() as session:
            return list(session.execute(stmt).scalars().all())

    def find_user_by_id(self, user_id: int) -> Optional[User]:
        if not fits_row_id(user_id):
            return None
        with get_session() as session:
            return session.get(User, user_id)

    def find_user_by_parameters(self, parameters: Iterable[Mapping[str, Any]]) -> Optional[User]:
        criteria = EqualityFilter.from_parameters(User, parameters)
        stmt = select(User).where(criteria.compile()).order_by(User.user_id).limit(1)
        with get_session() as session:
            return session.execute(stmt).scalars().first()

    def count_users(self) -> int:
        with get_session() as session:
            return session.execute(select(func.count(User.user_id))).scalar_one()
