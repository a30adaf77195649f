"""
Card use cases: create/search/update/delete cards and the status report.

Every write runs in one transaction that is committed only when a row was
actually changed; any exception rolls it back before propagating.
"""

from __future__ import annotations

import logging
from typing import Optional

from api.core.utils import format_database_datetime
from api.db.models import Card
from api.db.session import transaction
from api.domain.cards import STATUS_BUCKETS, CardStatus
from api.repositories.card_repository import CardRepository
from api.schemas.cards import CardCreate, CardUpdate

logger = logging.getLogger(__name__)

TOTAL_KEY = "totalCards"


class CardService:
    def __init__(self, repository: Optional[CardRepository] = None) -> None:
        self.repository = repository or CardRepository()

    def create_card(self, data: CardCreate) -> Card:
        now = format_database_datetime()
        fields = data.model_dump(exclude_none=True)
        fields.update(created_at=now, updated_at=now)
        with transaction() as session:
            card = self.repository.create_card(fields, session)
            session.commit()
        logger.info("Card %s criado para o usuario %s", card.card_id, card.user_id)
        return card

    def search_cards(self, user_id: Optional[int] = None) -> dict[str, list[Card]]:
        """Return the three status buckets, always all of them."""
        return {
            bucket: self.repository.search_cards(user_id, status.value)
            for status, bucket in STATUS_BUCKETS.items()
        }

    def find_card(self, card_id: int) -> Optional[Card]:
        return self.repository.find_card_by_id(card_id)

    def update_card(self, card_id: int, data: CardUpdate) -> Optional[Card]:
        fields = data.model_dump(exclude_unset=True, exclude_none=True)
        fields["updated_at"] = format_database_datetime()
        with transaction() as session:
            card = self.repository.update_card(card_id, fields, session)
            if card is not None:
                session.commit()
        return card

    def delete_card(self, card_id: int) -> Optional[Card]:
        with transaction() as session:
            card = self.repository.delete_card(card_id, session)
            if card is not None:
                session.commit()
        return card

    def delete_all_cards(self) -> None:
        with transaction() as session:
            self.repository.delete_all_cards(session)
            session.commit()
        logger.warning("Todos os cards foram removidos")

    def count_cards(self, user_id: Optional[int] = None) -> dict[str, int]:
        """
        Per-status totals keyed like the search buckets, plus ``totalCards``.

        Statuses without rows report 0; the total is the sum of the three
        buckets.
        """
        report = {bucket: 0 for bucket in STATUS_BUCKETS.values()}
        for row in self.repository.count_cards_by_status(user_id):
            try:
                bucket = STATUS_BUCKETS[CardStatus(row["status"])]
            except ValueError:
                logger.warning("Status de card desconhecido ignorado na contagem: %r", row["status"])
                continue
            report[bucket] = row["count"]
        report[TOTAL_KEY] = sum(report.values())
        return report
