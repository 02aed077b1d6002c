from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import pytest

# Make the habit_api package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from habit_api.app import create_app  # noqa: E402
from habit_api.core import config as core_config  # noqa: E402
from habit_api.db import models  # noqa: E402
from habit_api.db import session as db_session  # noqa: E402
from habit_api.repositories.sql_repository import SQLRepository  # noqa: E402


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Point DATABASE_URL at a temporary SQLite file and reset settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.delenv("DEFAULT_HABITS", raising=False)
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    try:
        models.Base.metadata.drop_all(bind=engine)
    except Exception:
        pass
    try:
        engine.dispose()
    except Exception:
        pass
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def repo(temp_db):
    return SQLRepository()


@pytest.fixture()
def make_client(temp_db):
    """Build a TestClient; keyword overrides are applied to the Settings."""
    clients = []

    def _make(repository=None, **overrides):
        base = dict(login_rate_limit=1000, signup_rate_limit=1000, auto_create_tables=False)
        base.update(overrides)
        settings = replace(core_config.get_settings(), **base)
        client = TestClient(create_app(settings=settings, repository=repository))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture()
def client(make_client):
    return make_client()
