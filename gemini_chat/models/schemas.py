import uuid
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

PLACEHOLDER_TITLE = "New Chat"
TITLE_MAX_LENGTH = 30
TITLE_ELLIPSIS = "..."


def _new_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Role(str, Enum):
    """Author of a message."""

    USER = "user"
    ASSISTANT = "assistant"


class Theme(str, Enum):
    """Colour scheme of the web interface."""

    LIGHT = "light"
    DARK = "dark"


class Message(BaseModel):
    """A single turn in a conversation.

    Messages are immutable once created.

    Attributes:
        id: Unique message identifier.
        role: Who wrote the message (user or assistant).
        content: The message text.
        timestamp: Creation time (UTC).
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    role: Role
    content: str
    timestamp: datetime = Field(default_factory=_utc_now)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role=Role.ASSISTANT, content=content)


class Conversation(BaseModel):
    """A titled, ordered sequence of messages.

    Attributes:
        id: Unique conversation identifier.
        title: Display title, placeholder until derived or renamed.
        messages: Messages oldest first.
        last_updated: Time of the most recent mutation.
            Serialized as ``lastUpdated``.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    title: str = PLACEHOLDER_TITLE
    messages: list[Message] = Field(default_factory=list)
    last_updated: datetime = Field(default_factory=_utc_now, alias="lastUpdated")

    def touch(self) -> None:
        """Bump last_updated to now."""
        self.last_updated = _utc_now()


ConversationList = TypeAdapter(list[Conversation])


def derive_title(content: str) -> str:
    """Build a conversation title from its first message.

    Content longer than 30 characters is cut to 30 and suffixed
    with an ellipsis.
    """
    if len(content) > TITLE_MAX_LENGTH:
        return content[:TITLE_MAX_LENGTH] + TITLE_ELLIPSIS
    return content


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        message: The new user turn.
        history: Prior messages of the conversation, oldest first.
        token: Gemini API credential supplied by the user.
    """

    message: str = Field(..., min_length=1)
    history: list[Message] = Field(default_factory=list)
    token: str = ""

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ChatResponse(BaseModel):
    """Successful chat reply."""

    response: str


class ErrorResponse(BaseModel):
    """Error body returned by the chat endpoint."""

    error: str
