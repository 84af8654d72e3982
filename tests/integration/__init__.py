"""Integration tests for components working together as a system.

Coverage:
    - POST /api/chat with real HTTP requests over ASGI transport
    - Chat session -> HTTP client -> API -> gateway, with file storage

Only the google-genai module is patched.
"""
