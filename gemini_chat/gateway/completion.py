"""Gemini completion gateway.

Turns one chat request (new message, prior history, credential) into a
single Gemini call and returns the generated text.

Design notes:

1. **Client per request** - The credential belongs to the caller, not the
   server, so a google-genai Client is built for each call with the key
   that came with it. Nothing about the caller is cached between calls.

2. **Role mapping at the boundary** - Internally messages are authored by
   ``user`` or ``assistant``. Gemini calls the assistant ``model``. The
   translation lives in ``to_remote_role`` so the internal vocabulary never
   reaches the wire format.

3. **One round trip** - No retries, no streaming, no timeout tuning. A
   failure is classified and raised as CompletionError for the HTTP layer
   to report.
"""

import logging

from google import genai
from google.genai import types

from gemini_chat.gateway.config import GatewayConfig, get_gateway_config
from gemini_chat.gateway.errors import MissingCredentialError, classify_error
from gemini_chat.models.schemas import Message, Role

logger = logging.getLogger(__name__)

REMOTE_USER_ROLE = "user"
REMOTE_MODEL_ROLE = "model"


def to_remote_role(role: Role) -> str:
    """Translate an internal role to Gemini's role vocabulary."""
    if role == Role.ASSISTANT:
        return REMOTE_MODEL_ROLE
    return REMOTE_USER_ROLE


def build_history(history: list[Message]) -> list[types.Content]:
    """Convert prior messages into Gemini chat history, oldest first."""
    return [
        types.Content(
            role=to_remote_role(msg.role),
            parts=[types.Part(text=msg.content)],
        )
        for msg in history
    ]


class CompletionGateway:
    """Issues single-turn Gemini chat completions on behalf of callers."""

    def __init__(self, config: GatewayConfig | None = None) -> None:
        """Initialize the gateway.

        Args:
            config: Optional gateway configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_gateway_config()

    @property
    def model_name(self) -> str:
        return self._config.model_name

    async def complete(
        self,
        message: str,
        history: list[Message],
        credential: str,
    ) -> str:
        """Generate a reply to message given the conversation so far.

        Args:
            message: The new user turn.
            history: Prior messages of the conversation, oldest first.
            credential: Gemini API key supplied by the user.

        Returns:
            The generated reply text, unmodified.

        Raises:
            MissingCredentialError: If credential is empty. No call is made.
            CompletionError: If the Gemini call fails, classified by cause.
        """
        if not credential or not credential.strip():
            raise MissingCredentialError()

        try:
            client = genai.Client(api_key=credential.strip())
            chat = client.aio.chats.create(
                model=self._config.model_name,
                history=build_history(history),
            )
            response = await chat.send_message(message)
        except Exception as e:
            logger.error(f"Gemini request failed: {e}")
            raise classify_error(e) from e

        return response.text or ""


# Module-level singleton instance
_gateway: CompletionGateway | None = None


def get_completion_gateway() -> CompletionGateway:
    """Get or create the global completion gateway.

    Returns:
        The CompletionGateway instance.
    """
    global _gateway
    if _gateway is None:
        _gateway = CompletionGateway()
    return _gateway
