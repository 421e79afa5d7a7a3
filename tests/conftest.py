"""
Jotter Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every API test runs against a fresh SQLite database (aiosqlite) in the
       test's tmp_path. Outbound collaborators are replaced through
       app.dependency_overrides:
           - FakeMailer records codes instead of speaking SMTP
           - StubIdentityVerifier returns canned Google claims
           - OTPService runs on a FakeClock the test can move forward

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── clock: controllable "now" for OTP expiry
    ├── mailer: FakeMailer
    ├── identity: StubIdentityVerifier
    ├── session_factory: async_sessionmaker bound to a fresh schema
    ├── mock_db_session: AsyncMock session for pure service tests
    ├── test_client: HTTPX AsyncClient wired to the app with overrides
    └── register_user: async helper, signup + verify → (token, user dict)
"""

import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run BEFORE any jotter import: settings and the engine read these once
_scratch = tempfile.mkdtemp(prefix="jotter_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_scratch}/health.db"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id.apps.googleusercontent.com"
os.environ["LOG_LEVEL"] = "WARNING"

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from jotter.database import Base, get_db_session  # noqa: E402
from jotter.dependencies import get_identity_verifier, get_mailer, get_otp_service  # noqa: E402
from jotter.exceptions import JotterError  # noqa: E402
from jotter.services.identity import IdentityClaims, IdentityVerifier  # noqa: E402
from jotter.services.mailer_base import Mailer  # noqa: E402
from jotter.services.otp_service import OTPService  # noqa: E402

import jotter.models  # noqa: E402,F401


# ══════════════════════════════════════════════════════════════════════════
# Test Doubles
# ══════════════════════════════════════════════════════════════════════════

@dataclass
class SentCode:
    recipient: str
    code: str
    name: Optional[str]


class FakeMailer(Mailer):
    """Records every OTP instead of sending it. Set `error` to simulate SMTP failure."""

    def __init__(self):
        self.sent: List[SentCode] = []
        self.error: Optional[JotterError] = None

    async def send_otp(self, recipient: str, code: str, name: Optional[str] = None) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(SentCode(recipient=recipient, code=code, name=name))

    def last_code_for(self, recipient: str) -> str:
        for entry in reversed(self.sent):
            if entry.recipient == recipient:
                return entry.code
        raise AssertionError(f"no OTP was mailed to {recipient}")


class StubIdentityVerifier(IdentityVerifier):
    """Returns `claims` for any token, or raises `error` when set."""

    def __init__(self):
        self.claims = IdentityClaims(
            subject="google-sub-1",
            email="grace@example.com",
            email_verified=True,
            name="Grace Hopper",
        )
        self.error: Optional[JotterError] = None
        self.tokens: List[str] = []

    async def verify(self, token: str) -> IdentityClaims:
        self.tokens.append(token)
        if self.error is not None:
            raise self.error
        return self.claims


@dataclass
class FakeClock:
    now: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> None:
        self.now = self.now + timedelta(**delta)


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def identity():
    return StubIdentityVerifier()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """
    A session factory bound to a brand-new SQLite file with the full schema.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'jotter.db'}",
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(session_factory, mailer, identity, clock):
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.
    How:     Database, mailer, identity verifier and OTP clock are overridden;
             overrides are removed again after the test.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from jotter.main import app

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_identity_verifier] = lambda: identity
    app.dependency_overrides[get_otp_service] = lambda: OTPService(ttl_minutes=10, clock=clock)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def register_user(test_client, mailer):
    """
    Async helper: sign up and verify an email account.

    Usage:
        token, user = await register_user("Ada", "ada@example.com")
    """

    async def _register(name: str = "Ada Lovelace", email: str = "ada@example.com"):
        response = await test_client.post("/auth/signup", json={"name": name, "email": email})
        assert response.status_code == 200, response.text

        code = mailer.last_code_for(email.strip().lower())
        response = await test_client.post("/auth/verify", json={"email": email, "otp": code})
        assert response.status_code == 200, response.text

        data = response.json()["data"]
        return data["token"], data["user"]

    return _register


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def bearer():
    """Builds an Authorization header from a token."""
    return auth_header
