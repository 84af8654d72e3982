"""Pydantic models for conversations and the chat API.

Provides type safety, validation, and a stable JSON form for persistence.

Models:
    - Message: One immutable turn authored by the user or the assistant
    - Conversation: Titled message sequence with its last update time
    - ChatRequest: Incoming chat request payload
    - ChatResponse / ErrorResponse: Outgoing chat results
"""

from gemini_chat.models.schemas import (
    PLACEHOLDER_TITLE,
    ChatRequest,
    ChatResponse,
    Conversation,
    ConversationList,
    ErrorResponse,
    Message,
    Role,
    Theme,
    derive_title,
)

__all__ = [
    "PLACEHOLDER_TITLE",
    "ChatRequest",
    "ChatResponse",
    "Conversation",
    "ConversationList",
    "ErrorResponse",
    "Message",
    "Role",
    "Theme",
    "derive_title",
]
