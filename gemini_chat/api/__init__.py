"""FastAPI endpoints for the Gemini chat client.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: One chat completion for a conversation
"""

from gemini_chat.api.app import app, create_app

__all__ = ["app", "create_app"]
