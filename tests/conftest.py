"""Shared fixtures: an in-memory database wired into the API, plus account and rate factories."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import gold_portfolio.models  # noqa: F401
from gold_portfolio.database import get_session
from gold_portfolio.main import app
from gold_portfolio.models.admin import Admin, AdminRole
from gold_portfolio.models.gold_rate import GoldRate
from gold_portfolio.models.member import Member
from gold_portfolio.services import email
from gold_portfolio.services.auth import create_access_token, hash_password

ADMIN_PASSWORD = "Admin@123"
MEMBER_PASSWORD = "Member@123"


@pytest.fixture
def engine():
    """Fresh in-memory SQLite per test; StaticPool keeps one shared connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def sent_emails(monkeypatch):
    """Capture outgoing mail instead of talking to SMTP."""
    outbox = []

    def fake_send(to, subject, text, html):
        outbox.append({"to": to, "subject": subject, "text": text, "html": html})
        return True

    monkeypatch.setattr(email, "_send", fake_send)
    return outbox


@pytest.fixture
def client(session, sent_emails):
    def override_get_session():
        return session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_admin(session):
    def _make(email_addr="admin@example.com", is_active=True, role=AdminRole.ADMIN):
        admin = Admin(
            name="Test Admin",
            email=email_addr,
            hashed_password=hash_password(ADMIN_PASSWORD),
            role=role,
            is_active=is_active,
        )
        session.add(admin)
        session.commit()
        session.refresh(admin)
        return admin

    return _make


@pytest.fixture
def make_member(session):
    def _make(email_addr="member@example.com", gold_holdings=0.0, is_active=True, name="Test Member"):
        member = Member(
            name=name,
            email=email_addr,
            hashed_password=hash_password(MEMBER_PASSWORD),
            phone="+91 98765 43210",
            gold_holdings=gold_holdings,
            is_active=is_active,
        )
        session.add(member)
        session.commit()
        session.refresh(member)
        return member

    return _make


@pytest.fixture
def admin(make_admin):
    return make_admin()


@pytest.fixture
def member(make_member):
    return make_member(gold_holdings=10.0)


@pytest.fixture
def active_rate(session, admin):
    rate = GoldRate(buy_price=6000.0, sell_price=6100.0, is_active=True, created_by=admin.id)
    session.add(rate)
    session.commit()
    session.refresh(rate)
    return rate


def auth_header(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin_headers(admin):
    return auth_header(admin)


@pytest.fixture
def member_headers(member):
    return auth_header(member)
