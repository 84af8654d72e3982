"""Local persistence for conversations and preferences.

Responsibilities:
    - Key-value storage backends (in-memory and NiceGUI persistent storage)
    - Conversation list with current-conversation tracking
    - Title derivation from the first user message
    - Credential, theme and sidebar preferences

Storage failures degrade to in-memory operation with a logged warning.
"""

from gemini_chat.store.conversations import ConversationNotFoundError, ConversationStore
from gemini_chat.store.preferences import Preferences
from gemini_chat.store.storage import (
    KeyValueStorage,
    MemoryStorage,
    NiceGuiStorage,
    StorageError,
    StorageQuotaExceededError,
)

__all__ = [
    "ConversationNotFoundError",
    "ConversationStore",
    "KeyValueStorage",
    "MemoryStorage",
    "NiceGuiStorage",
    "Preferences",
    "StorageError",
    "StorageQuotaExceededError",
]
