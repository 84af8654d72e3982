"""NiceGUI interface - thin presentation layer over the chat session.

Responsibilities:
    - Sidebar with conversations: new, select, rename, delete
    - Message display with a transient "Thinking..." indicator
    - API token settings dialog
    - Dark/light theme and sidebar state, persisted locally

All state changes go through ChatSession and the conversation store.
The chat page itself is registered by importing ``gemini_chat.ui.chat_page``.
"""

from gemini_chat.ui.client import ChatApiClient, ChatRequestError
from gemini_chat.ui.session import ChatSession, SendState, get_chat_session

__all__ = [
    "ChatApiClient",
    "ChatRequestError",
    "ChatSession",
    "SendState",
    "get_chat_session",
]
