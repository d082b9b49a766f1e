# tests/conftest.py
"""
Pytest configuration and fixtures for the Meeting Intelligence test suite.

Provides:
- In-memory Supabase mock client (see tests/fixtures/supabase.py)
- FastAPI test client wired to the mock through the real repositories
- Singleton resets between tests

Note: Tests never hit a real Supabase project.
"""

import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Set test environment before imports
os.environ["MEETING_INTEL_ENV"] = "test"
os.environ.pop("CRON_API_KEY", None)
os.environ.pop("MEETING_INTEL_SCHEDULER", None)
os.environ.pop("SUPABASE_URL", None)
os.environ.pop("SUPABASE_KEY", None)

from src.meeting_intel.config import reset_config
from src.meeting_intel.infrastructure.supabase_client import set_supabase_client
from src.meeting_intel.repositories import (
    reset_action_items_repository,
    reset_notifications_repository,
    reset_preferences_repository,
    reset_related_records_repository,
)
from tests.fixtures.supabase import MockSupabaseClient


def _reset_all():
    reset_config()
    set_supabase_client(None)
    reset_action_items_repository()
    reset_notifications_repository()
    reset_preferences_repository()
    reset_related_records_repository()


# ============== Supabase Mock Fixtures ==============

@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset config, client and repository singletons around every test."""
    _reset_all()
    yield
    _reset_all()


@pytest.fixture(scope="function")
def mock_supabase() -> MockSupabaseClient:
    """
    Mock Supabase client installed as the process-wide client.

    Repositories built by the factory functions use it.
    """
    client = MockSupabaseClient()
    set_supabase_client(client)
    return client


@pytest.fixture(scope="function")
def capped_supabase() -> MockSupabaseClient:
    """Mock client that truncates every select to 1000 rows, like PostgREST."""
    client = MockSupabaseClient(max_rows=1000)
    set_supabase_client(client)
    return client


# ============== FastAPI Client Fixtures ==============

@pytest.fixture(scope="function")
def client(mock_supabase) -> Generator[TestClient, None, None]:
    """FastAPI test client backed by the mock Supabase client."""
    from src.meeting_intel.main import app

    with TestClient(app) as test_client:
        yield test_client
