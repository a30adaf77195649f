"""Domain constants for task cards."""
from __future__ import annotations

from enum import Enum


class CardStatus(str, Enum):
    TODO = "TO-DO"
    DOING = "DOING"
    DONE = "DONE"


# Filtro de status enviado pelo front-end para "todos os status".
ALL_STATUSES = "Todos"

# Chaves do relatorio de busca/contagem, na ordem do quadro.
STATUS_BUCKETS = {
    CardStatus.TODO: "toDoCards",
    CardStatus.DOING: "doingCards",
    CardStatus.DONE: "doneCards",
}


def is_status_filter(value: str | None) -> bool:
    """True when `value` should restrict a search to one status."""
    return bool(value) and value != ALL_STATUSES
