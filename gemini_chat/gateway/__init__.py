"""Completion gateway between the chat client and the Gemini API.

Responsibilities:
    - Credential precondition before any network call
    - Role translation (assistant -> model) and history construction
    - A single chat completion per request via google-genai
    - Classification of failures into a fixed error taxonomy

Stateless apart from configuration. Knows nothing about HTTP or the UI.
"""

from gemini_chat.gateway.completion import (
    CompletionGateway,
    build_history,
    get_completion_gateway,
    to_remote_role,
)
from gemini_chat.gateway.config import GatewayConfig, get_gateway_config
from gemini_chat.gateway.errors import (
    CompletionError,
    ErrorKind,
    MissingCredentialError,
    classify_error,
)

__all__ = [
    "CompletionError",
    "CompletionGateway",
    "ErrorKind",
    "GatewayConfig",
    "MissingCredentialError",
    "build_history",
    "classify_error",
    "get_completion_gateway",
    "get_gateway_config",
    "to_remote_role",
]
