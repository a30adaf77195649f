"""
Smoke tests for the CardRepository against a temporary SQLite database.
"""
from __future__ import annotations

from api.db.session import transaction
from api.repositories.card_repository import CardRepository
from api.repositories.user_repository import UserRepository


def _create(repo: CardRepository, **fields):
    with transaction() as session:
        card = repo.create_card(fields, session)
        session.commit()
    return card


def test_create_and_find_card_with_owner(temp_db):
    with transaction() as session:
        user = UserRepository().create_user(
            {"name": "Alice", "email": "alice@example.com", "password": "x"}, session
        )
        session.commit()
    repo = CardRepository()
    card = _create(repo, user_id=user.user_id, title="Deploy", content="prod", status="TO-DO")

    found = repo.find_card_by_id(card.card_id)
    assert found is not None
    assert found.title == "Deploy"
    assert found.user_card is not None
    assert found.user_card.email == "alice@example.com"
    # owner comes along on list queries too, with the session already closed
    assert repo.search_cards(user.user_id)[0].user_card.name == "Alice"


def test_search_filters_by_user_and_status(temp_db):
    repo = CardRepository()
    _create(repo, user_id=7, title="a", status="TO-DO")
    _create(repo, user_id=7, title="b", status="DONE")
    _create(repo, user_id=8, title="c", status="TO-DO")

    assert [c.title for c in repo.search_cards(7, "TO-DO")] == ["a"]
    assert [c.title for c in repo.search_cards(7, "Todos")] == ["a", "b"]
    assert [c.title for c in repo.search_cards(None, "TO-DO")] == ["a", "c"]
    assert len(repo.search_cards()) == 3
    # unknown user yields nothing
    assert repo.search_cards(99, "TO-DO") == []


def test_find_card_by_parameters(temp_db):
    repo = CardRepository()
    _create(repo, user_id=1, title="Deploy", status="DOING")
    _create(repo, user_id=1, title="Deploy", status="DONE")

    card = repo.find_card_by_parameters(
        [{"field": "title", "value": "Deploy"}, {"field": "status", "value": "DONE"}]
    )
    assert card is not None and card.status == "DONE"
    assert repo.find_card_by_parameters([{"field": "title", "value": "nope"}]) is None


def test_update_and_delete_missing_card_return_none(temp_db):
    repo = CardRepository()
    with transaction() as session:
        assert repo.update_card(404, {"title": "x"}, session) is None
        assert repo.delete_card(404, session) is None


def test_update_then_delete_card(temp_db):
    repo = CardRepository()
    card = _create(repo, user_id=1, title="old", status="TO-DO")

    with transaction() as session:
        updated = repo.update_card(card.card_id, {"title": "new", "status": "DOING"}, session)
        session.commit()
    assert updated.title == "new"
    assert repo.find_card_by_id(card.card_id).status == "DOING"

    with transaction() as session:
        deleted = repo.delete_card(card.card_id, session)
        session.commit()
    assert deleted.card_id == card.card_id
    assert repo.find_card_by_id(card.card_id) is None


def test_delete_all_and_counts(temp_db):
    repo = CardRepository()
    _create(repo, user_id=7, title="a", status="TO-DO")
    _create(repo, user_id=7, title="b", status="TO-DO")
    _create(repo, user_id=7, title="c", status="DONE")
    _create(repo, user_id=8, title="d", status="DOING")

    assert repo.count_cards() == 4
    # ordered by status, descending
    assert repo.count_cards_by_status(7) == [
        {"status": "TO-DO", "count": 2},
        {"status": "DONE", "count": 1},
    ]
    assert [row["status"] for row in repo.count_cards_by_status()] == ["TO-DO", "DONE", "DOING"]

    with transaction() as session:
        repo.delete_all_cards(session)
        session.commit()
    assert repo.count_cards() == 0
    assert repo.count_cards_by_status() == []
