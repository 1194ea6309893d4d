"""Shared fixtures: in-memory SQLite session, seeded parkings/users, API client."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["EMAIL_API_KEY"] = ""
os.environ["RECEIPT_EMAIL_TO"] = ""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from parking_api.database import build_engine, create_tables, get_db
from parking_api.main import app
from parking_api.models import Parking, User, Role
from parking_api.security import Principal, hash_password, create_access_token


@pytest.fixture
def db():
    engine = build_engine("sqlite://")
    create_tables(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def make_parking(db):
    def _make(code="P001", total=10, fee="2.50", name=None):
        parking = Parking(code=code, name=name or f"Parking {code}", location="Downtown",
                          total_spaces=total, available_spaces=total, hourly_fee=Decimal(fee))
        db.add(parking)
        db.commit()
        return parking
    return _make


@pytest.fixture
def make_user(db):
    def _make(email="user@example.com", role=Role.USER, password="secret123"):
        user = User(first_name="Test", last_name="User", email=email,
                    password=hash_password(password), role=role.value)
        db.add(user)
        db.commit()
        return user
    return _make


@pytest.fixture
def operator(make_user):
    user = make_user()
    return Principal(id=user.id, email=user.email, role=Role.USER)


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(make_user):
    admin = make_user(email="admin@example.com", role=Role.ADMIN)
    return {"Authorization": f"Bearer {create_access_token(admin)}"}


@pytest.fixture
def user_headers(make_user):
    user = make_user(email="operator@example.com")
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def open_session(tmp_path):
    """Factory for independent sessions on one file-backed SQLite database."""
    engine = build_engine(f"sqlite:///{tmp_path / 'parking.db'}")
    create_tables(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    sessions = []

    def _open():
        session = factory()
        sessions.append(session)
        return session

    try:
        yield _open
    finally:
        for session in sessions:
            session.close()
        engine.dispose()


@pytest.fixture
def shared_parking(open_session):
    """Seed one parking through its own session and return its code."""
    def _make(code="P001", total=5, fee="2.50"):
        session = open_session()
        session.add(Parking(code=code, name=f"Parking {code}", location="Downtown",
                            total_spaces=total, available_spaces=total, hourly_fee=Decimal(fee)))
        session.commit()
        return code
    return _make
