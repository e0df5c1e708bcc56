"""
Global pytest configuration and shared fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from roomchat.db import UserRoomStore
from tests.fake_supabase import FakeSupabaseClient


@pytest.fixture
async def mock_env_vars() -> AsyncGenerator[None, None]:
    """
    Fixture that mocks required environment variables.
    """
    with patch.dict(
        "os.environ",
        {
            "SUPABASE_API_URL": "https://test.supabase.co",
            "SUPABASE_ANON_KEY": "test-key-123",
        },
    ):
        yield


@pytest.fixture
def fake_client() -> FakeSupabaseClient:
    return FakeSupabaseClient()


@pytest.fixture
def store(fake_client: FakeSupabaseClient) -> UserRoomStore:
    """A store backed by the in-memory client."""
    return UserRoomStore(fake_client)  # pyright: ignore[reportArgumentType]


@pytest.fixture
def mock_client() -> MagicMock:
    """A mocked Supabase client whose query builder chains back to itself."""
    client = MagicMock()
    table_instance = MagicMock()
    table_instance.select.return_value = table_instance
    table_instance.upsert.return_value = table_instance
    table_instance.eq.return_value = table_instance
    table_instance.execute = AsyncMock()

    client.table.return_value = table_instance
    return client


@pytest.fixture
def sample_room_rows() -> list[dict[str, Any]]:
    """Rows as the rooms_with_activity view returns them."""
    return [
        {"id": 1, "name": "general", "last_message_at": "2024-05-01T12:30:00+00:00"},
        {"id": 2, "name": "random", "last_message_at": "2024-05-02T08:00:00.123456+00:00"},
        {"id": 3, "name": "quiet", "last_message_at": None},
    ]
