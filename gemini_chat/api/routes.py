"""Chat endpoint proxying requests to the completion gateway.

Translates the JSON request into a gateway call and the gateway's result
or classified failure back into JSON.
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from gemini_chat.gateway.completion import get_completion_gateway
from gemini_chat.gateway.errors import CompletionError, ErrorKind
from gemini_chat.models.schemas import ChatRequest, ChatResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


def _error_response(error: CompletionError) -> JSONResponse:
    """Build the JSON error body for a classified failure.

    Args:
        error: The failure raised by the gateway.

    Returns:
        400 for a missing credential, 500 for anything else.
    """
    if error.kind == ErrorKind.MISSING_CREDENTIAL:
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error.message).model_dump(),
    )


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse, "description": "API token missing"},
        500: {"model": ErrorResponse, "description": "Gemini request failed"},
    },
)
async def chat(request: ChatRequest) -> ChatResponse | JSONResponse:
    """Generate a reply for the newest message of a conversation.

    Args:
        request: Message, prior history and the user's API token.

    Returns:
        ChatResponse with the generated text.

    Raises:
        400: No API token supplied.
        422: Empty or malformed message.
        500: Gemini rejected or failed the request.
    """
    gateway = get_completion_gateway()

    try:
        reply = await gateway.complete(
            message=request.message,
            history=request.history,
            credential=request.token,
        )
    except CompletionError as e:
        logger.warning(f"Chat request failed ({e.kind.value}): {e.message}")
        return _error_response(e)

    logger.info(f"Generated reply ({len(reply)} chars, {len(request.history)} prior turns)")
    return ChatResponse(response=reply)
