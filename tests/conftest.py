"""
Shared fixtures: an in-memory SQLite database per test, an HTTP client
wired to it, and a notifier that records outgoing SMS instead of sending.
"""

from __future__ import annotations

import os

os.environ.setdefault("VH_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("VH_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("VH_PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("VH_LOG_FORMAT", "text")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import volunteer_hub.models  # noqa: F401
from volunteer_hub.core.database import get_session
from volunteer_hub.core.sms import SmsDeliveryError, get_notifier
from volunteer_hub.main import app


class RecordingNotifier:
    """Stands in for Twilio. Set ``fail`` to simulate a delivery failure."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []
        self.fail = False

    async def send(self, to: str, body: str) -> str:
        if self.fail:
            raise SmsDeliveryError("provider unreachable: simulated")
        self.sent.append((to, body))
        return f"SM{len(self.sent):032d}"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session
        await session.commit()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
async def client(session_factory, notifier):
    async def override_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_notifier] = lambda: notifier
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
