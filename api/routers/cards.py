"""Card endpoints. Every route requires a valid bearer token."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.core.dependencies import require_auth
from api.core.errors import send_error_message
from api.db.models import Card
from api.schemas.cards import CardCreate, CardResponse, CardUpdate
from api.services.card_service import CardService

router = APIRouter(prefix="/cards", tags=["cards"], dependencies=[Depends(require_auth)])

CATEGORY = "CARDS"
NOT_FOUND = "Card não encontrado"


def _get_card_service(request: Request) -> CardService:
    svc = getattr(getattr(request.app, "state", None), "card_service", None)
    if not svc:
        raise RuntimeError("CardService nao configurado")
    return svc


def _card_body(card: Card) -> dict:
    return CardResponse.model_validate(card).to_wire()


@router.post("/")
def create_card(request: Request, payload: CardCreate):
    try:
        card = _get_card_service(request).create_card(payload)
    except SQLAlchemyError as exc:
        return send_error_message(
            request, exc, CATEGORY, "CADASTRO DE CARD", 500, "error",
            "Falha ao gerar o cadastro do card, tente novamente mais tarde",
        )
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=_card_body(card))


@router.get("/")
def search_cards(request: Request, user_id: Optional[int] = Query(None, alias="userId")):
    try:
        buckets = _get_card_service(request).search_cards(user_id)
    except SQLAlchemyError as exc:
        return send_error_message(
            request, exc, CATEGORY, "PESQUISA DE CARDS", 500, "error",
            "Falha ao pesquisar cards, tente novamente mais tarde",
        )
    return {bucket: [_card_body(card) for card in cards] for bucket, cards in buckets.items()}


@router.delete("/")
def delete_all_cards(request: Request):
    try:
        _get_card_service(request).delete_all_cards()
    except SQLAlchemyError as exc:
        return send_error_message(
            request, exc, CATEGORY, "DELEÇÃO DE CARDS", 500, "error",
            "Falha ao deletar o cadastro de todos cards, tente novamente mais tarde",
        )
    return "Todos os cards foram deletados"


@router.get("/tasks/count")
def count_cards(request: Request, user_id: Optional[int] = Query(None, alias="userId")):
    try:
        return _get_card_service(request).count_cards(user_id)
    except SQLAlchemyError as exc:
        return send_error_message(
            request, exc, CATEGORY, "CONTAGEM DE CARDS", 500, "error",
            "Falha ao obter os indicadores de cards, tente novamente mais tarde",
        )


@router.get("/{card_id}")
def find_card_by_id(request: Request, card_id: int):
    action = "PESQUISA DE CARD POR ID"
    try:
        card = _get_card_service(request).find_card(card_id)
    except SQLAlchemyError as exc:
        return send_error_message(
            request, exc, CATEGORY, action, 500, "error",
            "Falha ao pesquisar o card, tente novamente mais tarde",
        )
    if card is None:
        return send_error_message(request, None, CATEGORY, action, 404, "warning", NOT_FOUND)
    return _card_body(card)


@router.put("/{card_id}")
def update_card(request: Request, card_id: int, payload: CardUpdate):
    action = "ALTERAÇÃO DE CARD"
    try:
        card = _get_card_service(request).update_card(card_id, payload)
    except SQLAlchemyError as exc:
        return send_error_message(
            request, exc, CATEGORY, action, 500, "error",
            "Falha ao alterar o cadastro do card, tente novamente mais tarde",
        )
    if card is None:
        return send_error_message(request, None, CATEGORY, action, 404, "warning", NOT_FOUND)
    return _card_body(card)


@router.delete("/{card_id}")
def delete_card(request: Request, card_id: int):
    action = "DELEÇÃO DE CARD"
    try:
        card = _get_card_service(request).delete_card(card_id)
    except SQLAlchemyError as exc:
        return send_error_message(
            request, exc, CATEGORY, action, 500, "error",
            "Falha ao deletar o cadastro do card, tente novamente mais tarde",
        )
    if card is None:
        return send_error_message(request, None, CATEGORY, action, 404, "warning", NOT_FOUND)
    return _card_body(card)
