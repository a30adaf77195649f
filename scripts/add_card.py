#!/usr/bin/env python3
"""
Cadastrar um novo card diretamente no banco configurado em DATABASE_URL.

Uso:
  python scripts/add_card.py --user 7 --title "Revisar PR" [--content "..."] [--status DOING]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Garantir que o pacote api seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy.exc import SQLAlchemyError  # noqa: E402

from api.domain.cards import CardStatus  # noqa: E402
from api.repositories.user_repository import UserRepository  # noqa: E402
from api.schemas.cards import CardCreate  # noqa: E402
from api.services.card_service import CardService  # noqa: E402


def main() -> None:
    ap = argparse.ArgumentParser(description="Cadastrar card no banco")
    ap.add_argument("--user", type=int, required=True, help="userId do dono do card")
    ap.add_argument("--title", required=True, help="Titulo do card")
    ap.add_argument("--content", default="", help="Descricao do card")
    ap.add_argument(
        "--status",
        default=CardStatus.TODO.value,
        choices=[status.value for status in CardStatus],
        help="Status inicial (default: TO-DO)",
    )
    args = ap.parse_args()

    title = (args.title or "").strip()
    if not title:
        raise SystemExit("Titulo invalido")
    if not UserRepository().find_user_by_id(args.user):
        # cards sem dono valido sao aceitos pela API; aqui so avisamos
        print(f"Aviso: usuario {args.user} nao existe")

    try:
        card = CardService().create_card(
            CardCreate(user_id=args.user, title=title, content=args.content, status=args.status)
        )
    except SQLAlchemyError as exc:
        raise SystemExit(f"Falha ao cadastrar card: {exc}") from exc
    print("OK: card cadastrado")
    print(f"  cardId: {card.card_id}")
    print(f"  userId: {card.user_id}")
    print(f"  status: {card.status}")


if __name__ == "__main__":
    main()
