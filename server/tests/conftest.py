from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from parishdesk.auth.deps import get_current_user
from parishdesk.core.db import Base, get_db
from parishdesk.main import app
from parishdesk.schemas.collections import CollectionName
from parishdesk.schemas.records import PriestRecord
from parishdesk.services.records import accessor_for
from parishdesk.services.session import SessionUser
from parishdesk.stores.memory import MemoryDocumentStore
from parishdesk.stores.sql import SqlDocumentStore

SQLALCHEMY_TEST_URL = "sqlite+pysqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def override_get_db() -> Generator[Session, None, None]:
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_database() -> Generator[None, None, None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db_session: Session) -> SqlDocumentStore:
    return SqlDocumentStore(db_session)


@pytest.fixture()
def memory_store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    app.dependency_overrides.clear()
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def authorize(client: TestClient):
    def _apply(user: SessionUser):
        app.dependency_overrides[get_current_user] = lambda: user

    yield _apply
    app.dependency_overrides.pop(get_current_user, None)


@pytest.fixture()
def super_admin() -> SessionUser:
    return SessionUser(id="admin-uid", name="Parish Secretary", is_super_admin=True)


@pytest.fixture()
def priest_user() -> SessionUser:
    return SessionUser(id="priest-uid", name="Fr. Miguel Santos")


@pytest.fixture()
def other_priest_user() -> SessionUser:
    return SessionUser(id="other-priest-uid", name="Fr. Antonio Reyes")


@pytest.fixture()
def priest_id(store: SqlDocumentStore, priest_user: SessionUser) -> str:
    return accessor_for(store, CollectionName.PRIESTS).create(
        PriestRecord(name=priest_user.name, email="miguel@example.com", authId=priest_user.id)
    )


@pytest.fixture()
def other_priest_id(store: SqlDocumentStore, other_priest_user: SessionUser) -> str:
    return accessor_for(store, CollectionName.PRIESTS).create(
        PriestRecord(name=other_priest_user.name, email="antonio@example.com", authId=other_priest_user.id)
    )
