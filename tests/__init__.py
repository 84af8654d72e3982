"""Test package for Gemini Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP endpoint and end-to-end send flow tests

The Gemini SDK is always patched; no test reaches the network.
Leverages pytest with pytest-check for soft assertions.
"""
