"""Create (or recreate with --drop) the users/cards schema."""
from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # registers User/Card on Base.metadata

logger = logging.getLogger(__name__)


def create_all(*, drop: bool = False) -> None:
    engine = get_engine()
    if drop:
        Base.metadata.drop_all(bind=engine)
        logger.warning("Tabelas removidas em %s", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)
    logger.info("Tabelas verificadas/criadas em %s", engine.url.render_as_string(hide_password=True))


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Criar as tabelas do Taskboard no DATABASE_URL")
    ap.add_argument("--drop", action="store_true", help="Apaga as tabelas antes de recriar")
    args = ap.parse_args()
    logging.basicConfig(level=logging.INFO)
    try:
        create_all(drop=args.drop)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Falha ao criar as tabelas: {exc}") from exc
