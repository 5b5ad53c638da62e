"""Shared fixtures: in-memory database, seeded user and an authenticated API client."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from ledger.database import create_db_and_tables, get_session
from ledger.main import app
from ledger.models.account import Account
from ledger.models.user import User
from ledger.services.auth import create_access_token, generate_totp_secret


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def user(session) -> User:
    user = User(username="admin", hashed_password="not-used", totp_secret=generate_totp_secret())
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def make_account(session):
    def _make(accountable_type: str = "Depository", name: str = "Checking", **kwargs) -> Account:
        account = Account(name=name, accountable_type=accountable_type, **kwargs)
        session.add(account)
        session.commit()
        session.refresh(account)
        return account

    return _make


@pytest.fixture
def client(engine, user):
    def _session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _session_override
    client = TestClient(app)
    client.headers["Authorization"] = f"Bearer {create_access_token(user.username)}"
    yield client
    app.dependency_overrides.clear()
