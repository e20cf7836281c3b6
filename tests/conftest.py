"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock

import pytest
from supabase_auth import SyncMemoryStorage

# Set test environment variables before importing application modules
os.environ.setdefault("SUPABASE_URL", "")
os.environ.setdefault("SUPABASE_ANON_KEY", "")

from network20.core.config import Settings  # noqa: E402


def make_profile_row(**overrides: Any) -> dict[str, Any]:
    """Build a profiles table row as returned by Supabase."""
    row: dict[str, Any] = {
        "id": "550e8400-e29b-41d4-a716-446655440000",
        "user_id": "660e8400-e29b-41d4-a716-446655440000",
        "display_name": "Test User",
        "tagline": None,
        "bio": None,
        "location": None,
        "skills": [],
        "hours_available": None,
        "hours_frequency": "week",
        "pay_preference": None,
        "pay_rate": None,
        "contact_email": None,
        "contact_phone": None,
        "resume_url": None,
        "social_links": [],
        "avatar_url": None,
        "is_available": True,
        "is_public": True,
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


def make_job_row(**overrides: Any) -> dict[str, Any]:
    """Build a jobs table row as returned by Supabase."""
    row: dict[str, Any] = {
        "id": "770e8400-e29b-41d4-a716-446655440000",
        "company_name": "Acme",
        "job_title": "Designer",
        "description": None,
        "skills_needed": ["Figma"],
        "pay_range": None,
        "location": "Remote",
        "contact_email": "jobs@acme.test",
        "is_active": True,
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture
def local_settings() -> Settings:
    """Settings with no Supabase backend configured."""
    return Settings(_env_file=None, supabase_url="", supabase_anon_key="")


@pytest.fixture
def remote_settings() -> Settings:
    """Settings pointing at a (mocked) Supabase project."""
    return Settings(
        _env_file=None,
        supabase_url="https://test-project.supabase.co",
        supabase_anon_key="test-anon-key",
        auth_redirect_url="https://network20.test/auth/callback",
    )


@pytest.fixture
def memory_storage() -> SyncMemoryStorage:
    """Provide an in-memory key-value store."""
    return SyncMemoryStorage()


@pytest.fixture
def mock_supabase_client() -> Generator[MagicMock, None, None]:
    """Provide a mocked Supabase client.

    Yields:
        MagicMock: Mocked Supabase client for testing.
    """
    mock_client = MagicMock()

    mock_response = MagicMock()
    mock_response.data = []
    mock_client.table.return_value.select.return_value.limit.return_value.execute.return_value = (
        mock_response
    )

    yield mock_client


@pytest.fixture
def profile_row() -> Any:
    """Provide the profiles row factory."""
    return make_profile_row


@pytest.fixture
def job_row() -> Any:
    """Provide the jobs row factory."""
    return make_job_row
