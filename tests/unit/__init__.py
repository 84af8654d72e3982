"""Unit tests for individual components in isolation.

Coverage:
    - store/: Storage backends, conversation store, preferences
    - gateway/: Role mapping, completion call, error classification
    - ui/: Send state machine with a fake completion client
"""
