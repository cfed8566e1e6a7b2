"""Root conftest.py -- shared fixtures for all test modules."""
import os
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

# Set env vars BEFORE any app imports
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jwt-signing-only")
os.environ.setdefault("SEED_SHIPMENT_COUNT", "0")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from tms.core.config import Settings, get_settings
from tms.core.security import create_access_token
from tms.db.seed import generate_users
from tms.db.store import ShipmentStore, UserStore
from tms.models.enums import Priority, ShipmentStatus
from tms.models.shipment import Shipment
from tms.schemas.auth import UserResponse
from tms.services.auth import AuthService
from tms.services.shipments import ShipmentService

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


# =========================================================================
# Settings
# =========================================================================
@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Clear LRU cache before each test to prevent stale settings."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    return get_settings()


# =========================================================================
# Records
# =========================================================================
@pytest.fixture
def make_shipment():
    counter = {"n": 0}

    def _make(
        shipper_name: str = "Tech Solutions Inc.",
        carrier_name: str = "FedEx",
        pickup_location: str = "123 Broadway Ave, New York, NY",
        delivery_location: str = "159 Pike St, Seattle, WA",
        status: ShipmentStatus = ShipmentStatus.PENDING,
        priority: Priority = Priority.MEDIUM,
        weight: float = 100.0,
        rate: float = 500.0,
        flagged: bool = False,
        notes: Optional[str] = None,
        tracking_number: Optional[str] = None,
        created_at: Optional[datetime] = None,
        **kwargs,
    ) -> Shipment:
        counter["n"] += 1
        created = created_at or BASE_TIME - timedelta(hours=counter["n"])
        return Shipment(
            shipper_name=shipper_name,
            carrier_name=carrier_name,
            pickup_location=pickup_location,
            delivery_location=delivery_location,
            pickup_date=created + timedelta(days=1),
            delivery_date=created + timedelta(days=4),
            tracking_number=tracking_number or f"TRK{counter['n']:012d}",
            weight=weight,
            rate=rate,
            status=status,
            priority=priority,
            flagged=flagged,
            notes=notes,
            created_at=created,
            **kwargs,
        )

    return _make


@pytest.fixture
def shipment_store() -> ShipmentStore:
    return ShipmentStore()


# Hashing is slow; build the demo users once
@pytest.fixture(scope="session")
def seeded_users():
    return generate_users()


@pytest.fixture
def user_store(seeded_users) -> UserStore:
    return UserStore(seeded_users)


@pytest.fixture
def admin_user(user_store):
    return user_store.get_by_email("admin@tms.com")


@pytest.fixture
def employee_user(user_store):
    return user_store.get_by_email("employee@tms.com")


@pytest.fixture
def admin_caller(admin_user) -> UserResponse:
    return UserResponse.model_validate(admin_user)


@pytest.fixture
def employee_caller(employee_user) -> UserResponse:
    return UserResponse.model_validate(employee_user)


# =========================================================================
# Auth Fixtures
# =========================================================================
@pytest.fixture
def admin_token(admin_user) -> str:
    return create_access_token(admin_user)


@pytest.fixture
def employee_token(employee_user) -> str:
    return create_access_token(employee_user)


@pytest.fixture
def expired_token(admin_user) -> str:
    return create_access_token(admin_user, expires_delta=timedelta(seconds=-1))


# =========================================================================
# Services
# =========================================================================
@pytest.fixture
def auth_service(user_store) -> AuthService:
    return AuthService(user_store)


@pytest.fixture
def shipment_service(shipment_store) -> ShipmentService:
    return ShipmentService(shipment_store)


# =========================================================================
# FastAPI Test Client
# =========================================================================
@pytest.fixture
def app(test_settings, shipment_store, user_store):
    from tms.main import create_application

    return create_application(
        settings=test_settings,
        shipment_store=shipment_store,
        user_store=user_store,
    )


@pytest.fixture
async def client(app):
    from httpx import AsyncClient, ASGITransport

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def graphql(client):
    """POST a GraphQL document, optionally with a bearer token; returns JSON."""

    async def _execute(query: str, variables: Optional[dict] = None, token: Optional[str] = None) -> dict:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        response = await client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers,
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _execute
