"""Local key-value storage backends.

String keys map to string values, mirroring browser local storage.
Durable state lives in NiceGUI's server-wide ``app.storage.general``,
which NiceGUI writes to a JSON file under ``NICEGUI_STORAGE_PATH``.
"""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from typing import Any

from nicegui import app

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the storage backend cannot read or write."""

    pass


class StorageQuotaExceededError(StorageError):
    """Raised when a write would grow storage past its quota."""

    pass


class KeyValueStorage(ABC):
    """String-keyed, string-valued persistent storage."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            StorageError: If the value could not be written.
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete key. Missing keys are ignored."""
        pass


class MemoryStorage(KeyValueStorage):
    """Process-local storage, lost on exit."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class NiceGuiStorage(KeyValueStorage):
    """Storage kept in NiceGUI's persistent general store.

    NiceGUI loads ``app.storage.general`` at startup and saves it in the
    background after every change. The quota is checked here before a
    value is stored, so an oversized write fails immediately and leaves
    the previous contents in place.

    Args:
        mapping: Backing mapping. Defaults to ``app.storage.general``.
        quota_bytes: Optional upper bound on the serialized size.
    """

    def __init__(
        self,
        mapping: MutableMapping[str, Any] | None = None,
        quota_bytes: int | None = None,
    ) -> None:
        self._data = app.storage.general if mapping is None else mapping
        self._quota_bytes = quota_bytes

    def _check_quota(self, key: str, value: str) -> None:
        if self._quota_bytes is None:
            return
        size = len(json.dumps({**self._data, key: value}, ensure_ascii=False).encode("utf-8"))
        if size > self._quota_bytes:
            raise StorageQuotaExceededError(
                f"Storage quota exceeded ({size} > {self._quota_bytes} bytes)"
            )

    def get(self, key: str) -> str | None:
        value = self._data.get(key)
        if value is not None and not isinstance(value, str):
            logger.warning(f"Ignoring non-string value stored under {key!r}")
            return None
        return value

    def set(self, key: str, value: str) -> None:
        self._check_quota(key, value)
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
