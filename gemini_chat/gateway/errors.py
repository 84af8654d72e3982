"""Completion failure taxonomy.

Remote errors are classified by looking for known substrings in their
text. The checks run in a fixed order and the first match wins, since a
single message can mention several of them.

Matching ignores case. google-genai reports failures as ``"<code> <STATUS>.
<details>"``, so the same condition can arrive as ``PERMISSION_DENIED`` in
the status or as "permission" in the details, and the status alone must
still be recognised.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a failed completion."""

    MISSING_CREDENTIAL = "missing_credential"
    INVALID_CREDENTIAL = "invalid_credential"
    QUOTA_EXCEEDED = "quota_exceeded"
    PERMISSION_DENIED = "permission_denied"
    MODEL_UNAVAILABLE = "model_unavailable"
    GENERIC = "generic"


MISSING_CREDENTIAL_MESSAGE = "API token is required"
DEFAULT_ERROR_MESSAGE = "Failed to process message"

# Checked in order, first match wins
_CLASSIFICATION_RULES: list[tuple[str, ErrorKind, str]] = [
    (
        "api key",
        ErrorKind.INVALID_CREDENTIAL,
        "Invalid API key. Please check your Gemini API token.",
    ),
    (
        "quota",
        ErrorKind.QUOTA_EXCEEDED,
        "API quota exceeded. Please try again later.",
    ),
    (
        "permission",
        ErrorKind.PERMISSION_DENIED,
        "Permission denied. Please check your API token permissions.",
    ),
    (
        "model",
        ErrorKind.MODEL_UNAVAILABLE,
        "Model not available. Please try a different model or check your API access.",
    ),
]


class CompletionError(Exception):
    """Raised when a completion cannot be produced.

    Attributes:
        kind: Classified failure category.
        message: User-facing description.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class MissingCredentialError(CompletionError):
    """Raised before any network call when no credential is supplied."""

    def __init__(self) -> None:
        super().__init__(ErrorKind.MISSING_CREDENTIAL, MISSING_CREDENTIAL_MESSAGE)


def classify_error(error: BaseException | str) -> CompletionError:
    """Map a remote failure to a classified CompletionError.

    Args:
        error: The exception raised by the SDK, or its text.

    Returns:
        CompletionError for the first matching rule, or a generic one
        carrying the original text.
    """
    text = str(error)
    lowered = text.lower()

    for needle, kind, message in _CLASSIFICATION_RULES:
        if needle in lowered:
            return CompletionError(kind, message)

    return CompletionError(ErrorKind.GENERIC, text or DEFAULT_ERROR_MESSAGE)
