"""Send state machine connecting user input, the store and the chat endpoint.

One send moves through ``idle -> sending -> success | failed -> idle``.
The user's message is appended before the request goes out and the reply
(or the error text, as an assistant message) after it comes back, so
message order always follows send order. A single application-wide
loading flag blocks a second send while one is in flight.
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Protocol

from gemini_chat.config import get_app_config
from gemini_chat.gateway.errors import MissingCredentialError
from gemini_chat.models.schemas import Message
from gemini_chat.store.conversations import ConversationNotFoundError, ConversationStore
from gemini_chat.store.preferences import Preferences
from gemini_chat.store.storage import NiceGuiStorage
from gemini_chat.ui.client import ChatApiClient, ChatRequestError

logger = logging.getLogger(__name__)


class SendState(str, Enum):
    """Phase of the send state machine."""

    IDLE = "idle"
    SENDING = "sending"
    SUCCESS = "success"
    FAILED = "failed"


class CompletionClient(Protocol):
    async def complete(self, message: str, history: list[Message], token: str) -> str: ...


class ChatSession:
    """Application state shared by all UI handlers.

    Attributes:
        store: Conversations and the current-conversation pointer.
        preferences: Credential, theme and sidebar state.
        state: Current phase of the send state machine.
    """

    def __init__(
        self,
        store: ConversationStore,
        preferences: Preferences,
        client: CompletionClient,
    ) -> None:
        self.store = store
        self.preferences = preferences
        self._client = client
        self.state = SendState.IDLE

    @property
    def is_loading(self) -> bool:
        return self.state == SendState.SENDING

    def can_send(self, text: str) -> bool:
        """Whether a send of text would be accepted right now."""
        return bool(text.strip()) and bool(self.preferences.credential) and not self.is_loading

    async def send_message(
        self,
        text: str,
        on_sending: Callable[[], None] | None = None,
    ) -> SendState:
        """Send text in the current conversation and record the outcome.

        A conversation is created first when none is current. A send
        without a credential is rejected before anything is appended.

        Args:
            text: Raw user input; surrounding whitespace is dropped.
            on_sending: Called once the user message is appended and the
                request is about to go out.

        Returns:
            SUCCESS or FAILED for a completed send, IDLE if the text was
            blank or another send was in flight.

        Raises:
            MissingCredentialError: If no API token is configured.
        """
        content = text.strip()
        if not content or self.is_loading:
            return SendState.IDLE

        credential = self.preferences.credential
        if not credential:
            raise MissingCredentialError()

        conversation_id = self.store.current_id
        if conversation_id is None:
            conversation_id = self.store.create_conversation()

        conversation = self.store.get(conversation_id)
        history = list(conversation.messages) if conversation else []

        self.store.append_message(conversation_id, Message.user(content))
        self.state = SendState.SENDING
        if on_sending is not None:
            on_sending()

        try:
            reply = await self._client.complete(content, history, credential)
        except ChatRequestError as e:
            logger.warning(f"Send failed in conversation {conversation_id}: {e}")
            reply = str(e)
            outcome = SendState.FAILED
        else:
            outcome = SendState.SUCCESS
        finally:
            self.state = SendState.IDLE

        try:
            self.store.append_message(conversation_id, Message.assistant(reply))
        except ConversationNotFoundError:
            # Deleted while the request was in flight
            logger.info(f"Dropping reply for deleted conversation {conversation_id}")

        return outcome


# Module-level singleton instance
_chat_session: ChatSession | None = None


def get_chat_session() -> ChatSession:
    """Get or create the application-wide chat session.

    State is kept in NiceGUI's persistent general storage.

    Returns:
        The ChatSession instance.
    """
    global _chat_session
    if _chat_session is None:
        config = get_app_config()
        storage = NiceGuiStorage(quota_bytes=config.storage_quota_bytes)
        _chat_session = ChatSession(
            store=ConversationStore(storage),
            preferences=Preferences(storage),
            client=ChatApiClient(config.api_base_url),
        )
    return _chat_session
