"""Durable key-value storage used by the session store and usage counter.

Keys and values are plain strings, mirroring browser local storage. Any
mutable mapping can back the storage; the web UI binds it to NiceGUI's
persistent `app.storage.general`, tests bind it to a dict.
"""

import logging
from collections.abc import MutableMapping
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """String-keyed, string-valued durable storage."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MappingStorage:
    """KeyValueStorage over a mutable mapping.

    Writes go straight into the mapping, so a persistent mapping makes every
    write durable by the time `set` returns.
    """

    def __init__(self, data: MutableMapping[str, Any] | None = None) -> None:
        self._data: MutableMapping[str, Any] = data if data is not None else {}

    def get(self, key: str) -> str | None:
        value = self._data.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            logger.warning(f"Ignoring non-string value stored under {key!r}")
            return None
        return value

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data


def get_storage() -> KeyValueStorage:
    """Return storage backed by NiceGUI's server-wide persistent dict.

    Returns:
        MappingStorage over `app.storage.general`.
    """
    from nicegui import app

    return MappingStorage(app.storage.general)
