"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - memory_storage: Empty in-memory key-value storage
    - store: Conversation store over memory_storage
    - preferences: Preferences over memory_storage
    - mock_genai: Patched google-genai module with a canned chat reply
    - async_client: HTTPX client for API testing
"""

from collections.abc import AsyncGenerator, Iterator
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from gemini_chat.api import app
from gemini_chat.store import ConversationStore, MemoryStorage, Preferences


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Return empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def store(memory_storage: MemoryStorage) -> ConversationStore:
    """Return a conversation store with no saved conversations."""
    return ConversationStore(memory_storage)


@pytest.fixture
def preferences(memory_storage: MemoryStorage) -> Preferences:
    """Return preferences sharing the store's storage."""
    return Preferences(memory_storage)


@pytest.fixture
def mock_genai() -> Iterator[MagicMock]:
    """Patch the google-genai module used by the gateway.

    The chat created by ``client.aio.chats.create`` replies "Hi there".
    Set ``send_message.side_effect`` on the returned chat to simulate
    SDK failures.

    Yields:
        The patched ``genai`` module mock.
    """
    with patch("gemini_chat.gateway.completion.genai") as genai_mock:
        chat = genai_mock.Client.return_value.aio.chats.create.return_value
        chat.send_message = AsyncMock(return_value=SimpleNamespace(text="Hi there"))
        yield genai_mock


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
