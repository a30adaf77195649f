from __future__ import annotations

from typing import Optional

from pydantic import Field, model_validator

from api.db.models import MAX_ROW_ID
from api.domain.cards import CardStatus

from .base import CamelModel


class UserPublic(CamelModel):
    """Owner fields embedded in a card as ``userCard``."""

    user_id: int
    name: Optional[str] = None
    email: Optional[str] = None


class CardCreate(CamelModel):
    card_id: Optional[int] = Field(default=None, ge=1, le=MAX_ROW_ID)
    user_id: int = Field(ge=1, le=MAX_ROW_ID)
    title: str
    content: str = ""
    status: CardStatus = CardStatus.TODO


class CardUpdate(CamelModel):
    user_id: Optional[int] = Field(default=None, ge=1, le=MAX_ROW_ID)
    title: Optional[str] = None
    content: Optional[str] = None
    status: Optional[CardStatus] = None

    @model_validator(mode="before")
    @classmethod
    def reject_nulls(cls, data):
        # omitted fields keep their value; an explicit null is not a value
        if isinstance(data, dict):
            nulls = sorted(key for key, value in data.items() if value is None)
            if nulls:
                raise ValueError(f"Campos não podem ser nulos: {', '.join(nulls)}")
        return data


class CardResponse(CamelModel):
    card_id: int
    user_id: Optional[int] = None
    title: Optional[str] = None
    content: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    user_card: Optional[UserPublic] = None
