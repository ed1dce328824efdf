"""Pytest configuration and fixtures."""

import os
import time
from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from jose import jwt

# Set test environment variables before importing application modules
TEST_JWT_SECRET = "test-jwt-secret-for-unit-tests-0123456789"

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")
os.environ.setdefault("JWT_SIGNING_KEY", TEST_JWT_SECRET)
os.environ.setdefault("JWT_ALGORITHM", "HS256")

PARTNER_ID = "550e8400-e29b-41d4-a716-446655440000"
REQUEST_ID = "660e8400-e29b-41d4-a716-446655440000"


def create_test_token(
    sub: str = "firebase-uid-123",
    email: str | None = "test@example.com",
    exp_offset: int = 3600,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """Create an HS256 identity token for tests."""
    now = int(time.time())
    payload: dict[str, Any] = {
        "sub": sub,
        "role": "user",
        "exp": now + exp_offset,
        "iat": now,
    }
    if email is not None:
        payload["email"] = email
    return jwt.encode(payload, secret, algorithm="HS256")


def make_response(data: Any) -> MagicMock:
    """Build a store response object carrying ``data``."""
    response = MagicMock()
    response.data = data
    return response


@pytest.fixture
def partner_row() -> dict[str, Any]:
    """A partner as stored in the partners table."""
    return {
        "id": PARTNER_ID,
        "name": "Biology Club",
        "profile_image": "https://img.example.com/bio.png",
        "subject": "Biochemistry",
        "study_mode": "Online",
        "availability_time": "Evenings",
        "location": "Dhaka",
        "experience_level": "Intermediate",
        "rating": 4.5,
        "partner_count": 2,
        "email": "owner@example.com",
        "created_at": "2024-01-01T00:00:00+00:00",
    }


@pytest.fixture
def request_row() -> dict[str, Any]:
    """A partner request as stored in the partner_requests table."""
    return {
        "id": REQUEST_ID,
        "partner_id": PARTNER_ID,
        "partner_name": "Biology Club",
        "partner_image": "https://img.example.com/bio.png",
        "subject": "Biochemistry",
        "study_mode": "Online",
        "availability_time": "Evenings",
        "location": "Dhaka",
        "experience_level": "Intermediate",
        "rating": 4.5,
        "partner_count": 3,
        "requested_by": "test@example.com",
        "requested_at": "2024-01-02T00:00:00+00:00",
    }


@pytest.fixture(scope="session")
def test_settings() -> Generator[Any, None, None]:
    """Provide test settings with cleared cache.

    Yields:
        Settings: Test configuration settings.
    """
    from src.core.config import get_settings

    get_settings.cache_clear()
    settings = get_settings()
    yield settings
    get_settings.cache_clear()


@pytest.fixture
def mock_supabase_client() -> MagicMock:
    """Provide a mocked Supabase client.

    Returns:
        MagicMock: Mocked Supabase client for testing.
    """
    mock_client = MagicMock()
    mock_client.table.return_value.select.return_value.limit.return_value.execute.return_value = (
        make_response([])
    )
    return mock_client


@pytest.fixture
def client(mock_supabase_client: MagicMock) -> Generator[TestClient, None, None]:
    """Provide a test client whose services use the mocked store.

    Args:
        mock_supabase_client: Mocked Supabase client fixture.

    Yields:
        TestClient: FastAPI test client.
    """
    from src.api.deps import get_partner_request_service, get_partner_service
    from src.main import app
    from src.services.partner_request_service import PartnerRequestService
    from src.services.partner_service import PartnerService

    app.dependency_overrides[get_partner_service] = lambda: PartnerService(client=mock_supabase_client)
    app.dependency_overrides[get_partner_request_service] = lambda: PartnerRequestService(
        client=mock_supabase_client
    )

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Authorization header for test@example.com."""
    return {"Authorization": f"Bearer {create_test_token()}"}


@pytest.fixture
def make_token() -> Any:
    """Factory for identity tokens with custom claims."""
    return create_test_token
