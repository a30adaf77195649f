"""
Utility helpers shared across routers/services.
"""

from datetime import datetime
from typing import Optional

DATABASE_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DISPLAY_DATETIME_FORMAT = "%d/%m/%Y %H:%M:%S"


def format_database_datetime(value: Optional[datetime] = None) -> str:
    """
    Formata a data no padrao gravado nas colunas createdAt/updatedAt.
    """
    return (value or datetime.now()).strftime(DATABASE_DATETIME_FORMAT)


def format_datetime(value: Optional[datetime] = None) -> str:
    """
    Formata a data no padrao exibido nas respostas de erro.
    """
    return (value or datetime.now()).strftime(DISPLAY_DATETIME_FORMAT)
