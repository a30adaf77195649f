"""Data access for task cards backed by SQLAlchemy."""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from api.db.models import Card, fits_row_id
from api.db.session import get_session
from api.domain.cards import is_status_filter

from .filters import EqualityFilter


class CardRepository:
    """CRUD helpers for cards.

    Reads open their own short-lived session. Writes run on the session handed
    in by the caller, which owns the transaction (commit/rollback). Ids outside
    the 64-bit range match no card.
    """

    # -------------------------- writes --------------------------
    def create_card(self, fields: Mapping[str, Any], session: Session) -> Card:
        entity = Card(**dict(fields))
        session.add(entity)
        session.flush()
        session.refresh(entity)
        return entity

    def update_card(self, card_id: int, fields: Mapping[str, Any], session: Session) -> Optional[Card]:
        if not fits_row_id(card_id):
            return None
        entity = session.get(Card, card_id)
        if not entity:
            return None
        for key, value in fields.items():
            setattr(entity, key, value)
        session.flush()
        # userId may have changed; reload the owner as well
        session.refresh(entity)
        return entity

    def delete_card(self, card_id: int, session: Session) -> Optional[Card]:
        if not fits_row_id(card_id):
            return None
        entity = session.get(Card, card_id)
        if not entity:
            return None
        session.delete(entity)
        session.flush()
        return entity

    def delete_all_cards(self, session: Session) -> None:
        session.execute(delete(Card))

    # -------------------------- reads --------------------------
    def search_cards(self, user_id: Optional[int] = None, status: Optional[str] = None) -> list[Card]:
        if not fits_row_id(user_id):
            return []
        criteria = EqualityFilter(Card).add_if("user_id", user_id).add_if(
            "status", status, is_status_filter(status)
        )
        stmt = select(Card).where(criteria.compile()).order_by(Card.card_id)
        with get_session() as session:
            return list(session.execute(stmt).scalars().unique().all())

    def find_card_by_id(self, card_id: int) -> Optional[Card]:
        if not fits_row_id(card_id):
            return None
        with get_session() as session:
            return session.get(Card, card_id)

    def find_card_by_parameters(self, parameters: Iterable[Mapping[str, Any]]) -> Optional[Card]:
        """
        Busca um card combinando (AND) pares campo/valor, por exemplo
        ``[{"field": "title", "value": "Deploy"}, {"field": "status", "value": "DONE"}]``.
        """
        criteria = EqualityFilter.from_parameters(Card, parameters)
        stmt = select(Card).where(criteria.compile()).order_by(Card.card_id).limit(1)
        with get_session() as session:
            return session.execute(stmt).scalars().first()

    def count_cards(self) -> int:
        with get_session() as session:
            return session.execute(select(func.count(Card.card_id))).scalar_one()

    def count_cards_by_status(self, user_id: Optional[int] = None) -> list[dict]:
        if not fits_row_id(user_id):
            return []
        criteria = EqualityFilter(Card).add_if("user_id", user_id)
        stmt = (
            select(Card.status, func.count(Card.card_id))
            .where(criteria.compile())
            .group_by(Card.status)
            .order_by(Card.status.desc())
        )
        with get_session() as session:
            return [{"status": status, "count": int(total)} for status, total in session.execute(stmt)]
