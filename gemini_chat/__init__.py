"""Gemini Chat - multi-conversation chat client for the Gemini API.

Combines FastAPI for the chat RPC endpoint, google-genai for completions,
NiceGUI for the browser interface, and Pydantic for data validation.

Components:
    - api: HTTP endpoint proxying chat requests to Gemini
    - gateway: Completion call, role mapping and error classification
    - store: Local key-value persistence, conversations and preferences
    - ui: Send state machine, HTTP client and web interface
    - models: Message, conversation and request/response schemas
"""

__version__ = "0.1.0"
