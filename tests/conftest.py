"""Shared fixtures: a throwaway SQLite database per test and an ASGI client wired to it."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")

from typing import Any, AsyncGenerator, Dict, List, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.security import create_backend_access_token
from app.core.v1_dependencies import get_push_sink, get_settlement_scheduler
from app.database import Base, get_db
from app.main import app
from app.models import ClientProfile, Currency, GarageProfile, PremiumOffer, UserType


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, Any]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, Any]:
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def scheduled() -> List[Tuple[str, int]]:
    return []


@pytest.fixture
def pushed() -> List[Tuple[int, str]]:
    return []


@pytest_asyncio.fixture
async def client(session_factory, scheduled, pushed) -> AsyncGenerator[AsyncClient, Any]:
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    def record_settlement(kind: str, order_id: int) -> None:
        scheduled.append((kind, order_id))

    async def record_push(client_id: int, message: str) -> bool:
        pushed.append((client_id, message))
        return True

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settlement_scheduler] = lambda: record_settlement
    app.dependency_overrides[get_push_sink] = lambda: record_push

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_backend_access_token('ops@example.com', role='Admin')}"}


@pytest.fixture
def user_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_backend_access_token('someone@example.com', role='User')}"}


@pytest_asyncio.fixture
async def catalog(db) -> Dict[str, int]:
    """Minimal reference data plus one client and one garage, committed."""
    currency = Currency(curr_desc="USD")
    user_type = UserType(user_type_desc="Client")
    db.add_all([currency, user_type])
    await db.flush()

    offer = PremiumOffer(user_type_id=user_type.id, premium_desc="Gold", premium_cost=100, curr_id=currency.id)
    client = ClientProfile(first_name="Ada", last_name="Byron", email="ada@example.com")
    garage = GarageProfile(garage_name="Northside Motors", email="north@example.com")
    db.add_all([offer, client, garage])
    await db.commit()

    return {
        "currency_id": currency.id,
        "user_type_id": user_type.id,
        "offer_id": offer.id,
        "client_id": client.id,
        "garage_id": garage.id,
    }


@pytest.fixture
def card_payload():
    def build(owner_field: str, owner_id: int, number: str = "4111111111111111") -> Dict[str, Any]:
        return {
            owner_field: owner_id,
            "payment_type": "Card",
            "card_number": number,
            "card_holder_name": "Ada Byron",
            "expiry_month": 12,
            "expiry_year": 2030,
            "cvv": "123",
        }

    return build
