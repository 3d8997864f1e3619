"""Shared fixtures: an app wired with in-memory cache and fake collaborators."""

import sqlite3
from typing import Dict

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from infrastructure.auth.jwt_service import JWTService
from infrastructure.cache.memory_cacher import MemoryCacher
from infrastructure.db.sqlite import SQLiteTransactionRepository, create_table
from infrastructure.web.container import ServiceContainer
from main import create_app
from tests.helpers import SECRET, FakePdfProvider, FakeUserProfileProvider, RecordingNotifier


@pytest.fixture
def in_memory_db():
    """Create an in-memory SQLite database with the transactions table."""
    conn = sqlite3.connect(":memory:", check_same_thread=False)
    create_table(conn)
    yield conn
    conn.close()


@pytest.fixture
def transaction_repo(in_memory_db):
    return SQLiteTransactionRepository(in_memory_db)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        SECRET_KEY=SECRET,
        DB_PATH=str(tmp_path / "transactions.db"),
        CACHE_BACKEND="memory",
        CACHE_DURATION="1m",
        SERVICE_ROUTE_VERSION="v1",
        PDF_TEMPLATE_ID="tpl-1",
        HTML_TEMPLATE_FILE="",
    )


@pytest.fixture
def jwt_service():
    return JWTService(SECRET)


@pytest.fixture
def container(settings, jwt_service):
    return ServiceContainer(
        settings=settings,
        jwt_service=jwt_service,
        cacher=MemoryCacher(),
        users=FakeUserProfileProvider(),
        pdf=FakePdfProvider(),
        notifier=RecordingNotifier(),
        pdf_template_id=settings.PDF_TEMPLATE_ID,
    )


@pytest.fixture
def client(container):
    with TestClient(create_app(container)) as c:
        yield c


@pytest.fixture
def auth_headers(jwt_service):
    """Build a Cookie header carrying a fresh token for a user id."""
    def _headers(user_id: str = "u1") -> Dict[str, str]:
        return {"Cookie": f"token={jwt_service.generate_token(user_id)}"}
    return _headers


@pytest.fixture
def db_repo(settings):
    """Repository on the same database file the app uses."""
    conn = sqlite3.connect(settings.DB_PATH, check_same_thread=False)
    create_table(conn, settings.TABLE_NAME)
    yield SQLiteTransactionRepository(conn, settings.TABLE_NAME)
    conn.close()
