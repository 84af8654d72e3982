"""HTTP client for the chat endpoint."""

import httpx
from pydantic import ValidationError

from gemini_chat.models.schemas import ChatRequest, ChatResponse, Message

DEFAULT_ERROR = "Failed to get response"


class ChatRequestError(Exception):
    """Raised when the chat endpoint returns an error or cannot be reached."""

    pass


class ChatApiClient:
    """Posts chat requests to ``/api/chat`` and unwraps the reply."""

    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 120.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._transport = transport
        self._timeout = timeout

    async def complete(self, message: str, history: list[Message], token: str) -> str:
        """Request a reply for message.

        Raises:
            ChatRequestError: With the server's error text on failure, or a
                default message when a success response has no reply.
        """
        payload = ChatRequest(message=message, history=history, token=token)

        async with httpx.AsyncClient(
            base_url=self._base_url, transport=self._transport, timeout=self._timeout
        ) as client:
            try:
                response = await client.post(
                    "/api/chat", json=payload.model_dump(mode="json")
                )
            except httpx.RequestError as e:
                raise ChatRequestError(f"Connection failed: {e}") from e

        if response.is_success:
            try:
                return ChatResponse.model_validate(response.json()).response
            except (ValueError, ValidationError) as e:
                raise ChatRequestError(DEFAULT_ERROR) from e

        raise ChatRequestError(_error_text(response))


def _error_text(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return DEFAULT_ERROR
