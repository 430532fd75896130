"""
Shared pytest fixtures for all tests.

This module provides common fixtures for mocked sessions, sample users
and other shared testing utilities.
"""

import os
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"

from agenda.domains.scheduling.domain.entities import User  # noqa: E402

# Fixed "now" for booking tests: 2024-06-10 09:30 UTC
NOW = datetime(2024, 6, 10, 9, 30, tzinfo=UTC)


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def mock_async_session():
    """Create a mock async database session."""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.add = MagicMock()
    return session


# ============================================================================
# TEST DATA FIXTURES
# ============================================================================


@pytest.fixture
def fixed_now() -> datetime:
    return NOW


@pytest.fixture
def client_user() -> User:
    """Client who books appointments."""
    return User(id=1, name="Maria Silva", email="maria@example.com", is_provider=False)


@pytest.fixture
def provider_user() -> User:
    """Provider who receives bookings."""
    return User(id=2, name="Ana Souza", email="ana@example.com", is_provider=True)
