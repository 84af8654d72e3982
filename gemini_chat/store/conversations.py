"""Conversation store with local persistence.

Holds the authoritative list of conversations, tracks which one is
current, and mirrors the whole list to key-value storage after every
change to its content.

Persistence failures never reach the caller. The first failed write is
logged, recorded in ``persistence_error`` and switches the store to
in-memory-only operation for the rest of the process.
"""

import logging

from pydantic import ValidationError

from gemini_chat.models.schemas import (
    Conversation,
    ConversationList,
    Message,
    Role,
    derive_title,
)
from gemini_chat.store.storage import KeyValueStorage, StorageError

logger = logging.getLogger(__name__)

CONVERSATIONS_KEY = "conversations"


class ConversationNotFoundError(KeyError):
    """Raised when an operation names a conversation that does not exist."""

    pass


class ConversationStore:
    """In-memory conversation list mirrored to key-value storage.

    Conversations are kept newest-created first. At most one is current.
    """

    def __init__(self, storage: KeyValueStorage) -> None:
        """Load persisted conversations.

        Args:
            storage: Backend holding the ``conversations`` key.
        """
        self._storage = storage
        self._conversations: list[Conversation] = self._load()
        self._current_id: str | None = None
        self._persistence_error: StorageError | None = None

    @property
    def conversations(self) -> list[Conversation]:
        """Conversations in display order (newest created first)."""
        return list(self._conversations)

    @property
    def current_id(self) -> str | None:
        return self._current_id

    @property
    def current(self) -> Conversation | None:
        if self._current_id is None:
            return None
        return self.get(self._current_id)

    @property
    def persistence_error(self) -> StorageError | None:
        """The write failure that disabled persistence, if any."""
        return self._persistence_error

    def get(self, conversation_id: str) -> Conversation | None:
        for conversation in self._conversations:
            if conversation.id == conversation_id:
                return conversation
        return None

    def create_conversation(self) -> str:
        """Insert an empty conversation at the front and make it current.

        Returns:
            The new conversation's id.
        """
        conversation = Conversation()
        self._conversations.insert(0, conversation)
        self._current_id = conversation.id
        self._save()
        logger.debug(f"Created conversation {conversation.id}")
        return conversation.id

    def select_conversation(self, conversation_id: str) -> bool:
        """Make a conversation current.

        Returns:
            False if no conversation has this id; nothing changes then.
        """
        if self.get(conversation_id) is None:
            logger.warning(f"Cannot select unknown conversation {conversation_id}")
            return False
        self._current_id = conversation_id
        return True

    def delete_conversation(self, conversation_id: str) -> None:
        """Remove a conversation. Unknown ids are ignored."""
        conversation = self.get(conversation_id)
        if conversation is None:
            return

        self._conversations.remove(conversation)
        if self._current_id == conversation_id:
            self._current_id = None
        self._save()

    def rename_conversation(self, conversation_id: str, new_title: str) -> bool:
        """Set a conversation's title.

        Blank titles and unknown ids are discarded without error.

        Returns:
            True if the title was changed.
        """
        title = new_title.strip()
        conversation = self.get(conversation_id)
        if not title or conversation is None:
            return False

        conversation.title = title
        conversation.touch()
        self._save()
        return True

    def append_message(self, conversation_id: str, message: Message) -> None:
        """Append a message to a conversation.

        The first user message of an empty conversation also sets its title.

        Raises:
            ConversationNotFoundError: If the conversation does not exist.
        """
        conversation = self.get(conversation_id)
        if conversation is None:
            raise ConversationNotFoundError(conversation_id)

        if not conversation.messages and message.role == Role.USER:
            conversation.title = derive_title(message.content)

        conversation.messages.append(message)
        conversation.touch()
        self._save()

    def _load(self) -> list[Conversation]:
        try:
            raw = self._storage.get(CONVERSATIONS_KEY)
        except StorageError as e:
            logger.warning(f"Failed to read saved conversations: {e}")
            return []

        if not raw:
            return []

        try:
            conversations = ConversationList.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding corrupt saved conversations: {e}")
            return []

        logger.info(f"Loaded {len(conversations)} saved conversations")
        return conversations

    def _save(self) -> None:
        if self._persistence_error is not None:
            return

        payload = ConversationList.dump_json(self._conversations, by_alias=True)
        try:
            self._storage.set(CONVERSATIONS_KEY, payload.decode("utf-8"))
        except StorageError as e:
            self._persistence_error = e
            logger.warning(
                f"Saving conversations failed, continuing without persistence: {e}"
            )
