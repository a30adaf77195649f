"""
Fixtures compartilhadas: SQLite temporário por teste e um TestClient autenticado.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote api seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient

from api.core import config as core_config
from api.core.rate_limiter import reset_rate_limits
from api.core.security import create_access_token
from api.db import models
from api.db import session as db_session


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Configura um SQLite temporário e descarta engine/caches no teardown."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("CREATE_TABLES", "false")
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    _clear_caches()
    reset_rate_limits()

    engine = db_session.get_engine()
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    _clear_caches()
    reset_rate_limits()


@pytest.fixture()
def client(temp_db):
    from api.app import create_app

    return TestClient(create_app())


@pytest.fixture()
def auth_headers(temp_db):
    return {"Authorization": f"Bearer {create_access_token(1)}"}
