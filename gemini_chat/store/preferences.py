"""User preferences kept alongside conversations.

Stores the Gemini credential, the UI theme and whether the sidebar is open.
"""

import json
import logging

from gemini_chat.models.schemas import Theme
from gemini_chat.store.storage import KeyValueStorage, StorageError

logger = logging.getLogger(__name__)

CREDENTIAL_KEY = "credential"
THEME_KEY = "theme"
SIDEBAR_OPEN_KEY = "sidebar-open"


class Preferences:
    """Typed accessors over the preference keys of a storage backend."""

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage

    @property
    def credential(self) -> str:
        return self._get(CREDENTIAL_KEY) or ""

    @credential.setter
    def credential(self, value: str) -> None:
        self._set(CREDENTIAL_KEY, value.strip())

    @property
    def theme(self) -> Theme:
        raw = self._get(THEME_KEY)
        try:
            return Theme(raw)
        except ValueError:
            return Theme.LIGHT

    @theme.setter
    def theme(self, value: Theme) -> None:
        self._set(THEME_KEY, Theme(value).value)

    @property
    def sidebar_open(self) -> bool:
        raw = self._get(SIDEBAR_OPEN_KEY)
        if raw is None:
            return True
        try:
            value = json.loads(raw)
        except ValueError:
            return True
        return value if isinstance(value, bool) else True

    @sidebar_open.setter
    def sidebar_open(self, value: bool) -> None:
        self._set(SIDEBAR_OPEN_KEY, json.dumps(bool(value)))

    def _get(self, key: str) -> str | None:
        try:
            return self._storage.get(key)
        except StorageError as e:
            logger.warning(f"Failed to read preference {key!r}: {e}")
            return None

    def _set(self, key: str, value: str) -> None:
        try:
            self._storage.set(key, value)
        except StorageError as e:
            logger.warning(f"Failed to save preference {key!r}: {e}")
