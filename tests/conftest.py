"""Shared fixtures: an in-memory database per test and API clients per role."""

import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "edutrack-test-logs"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import app
from core.database import get_db, init_db
from core.policies import PolicySession, bind_caller, elevated
from utils.account_manager import AccountManager
from utils.role_manager import RoleManager

PASSWORD = "secret123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        autocommit=False, autoflush=False, bind=engine, class_=PolicySession
    )


@pytest.fixture
def make_account(session_factory):
    """Create an account directly in the store, optionally with a role."""

    def _make(email, role=None, **metadata):
        with session_factory() as db:
            account = AccountManager(db).create_account(email, PASSWORD, metadata)
            account_id = account.id
            if role is not None:
                with elevated(db):
                    RoleManager(db).grant_role(account_id, role)
        return account_id

    return _make


@pytest.fixture
def session_for(session_factory):
    """Open a session bound to a caller uid (None for anonymous)."""
    sessions = []

    def _open(uid):
        db = bind_caller(session_factory(), uid)
        sessions.append(db)
        return db

    yield _open
    for db in sessions:
        db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Log in through the API and return bearer headers."""

    def _login(email, password=PASSWORD):
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _login


@pytest.fixture
def admin_headers(make_account, login):
    make_account("admin@school.edu", role="admin")
    return login("admin@school.edu")


@pytest.fixture
def teacher_headers(make_account, login):
    make_account("teacher@school.edu", role="teacher")
    return login("teacher@school.edu")


@pytest.fixture
def student_headers(make_account, login):
    make_account("pupil@school.edu", role="student")
    return login("pupil@school.edu")


@pytest.fixture
def student_payload():
    def _payload(id_number="2024-001", first_name="Ana", last_name="Reyes"):
        return {
            "first_name": first_name,
            "last_name": last_name,
            "id_number": id_number,
            "email": f"{id_number}@school.edu",
            "course": "BS Computer Science",
        }

    return _payload
