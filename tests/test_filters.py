from __future__ import annotations

import pytest
from sqlalchemy.dialects import sqlite
from sqlalchemy.sql.elements import True_

from api.db.models import Card
from api.repositories.filters import EqualityFilter


def _sql(criteria: EqualityFilter) -> str:
    return str(criteria.compile().compile(dialect=sqlite.dialect()))


def test_empty_filter_matches_everything():
    criteria = EqualityFilter(Card)
    assert len(criteria) == 0
    assert isinstance(criteria.compile(), True_)


def test_add_if_skips_missing_values():
    criteria = EqualityFilter(Card).add_if("user_id", None).add_if("status", "DONE")
    assert len(criteria) == 1
    assert '"userId"' not in _sql(criteria)
    assert "cards.status" in _sql(criteria)


def test_add_if_respects_explicit_condition():
    criteria = EqualityFilter(Card).add_if("status", "Todos", False).add_if("user_id", 0, True)
    assert len(criteria) == 1
    assert 'cards."userId"' in _sql(criteria)


def test_column_names_resolve_to_attributes():
    criteria = EqualityFilter.from_parameters(
        Card, [{"field": "userId", "value": 7}, {"field": "user_id", "value": 8}]
    )
    # same column, the last value wins
    assert len(criteria) == 1


def test_unknown_field_is_rejected():
    with pytest.raises(ValueError):
        EqualityFilter(Card).add("owner", 1)
