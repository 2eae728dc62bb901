"""In-memory key-value store."""

from __future__ import annotations

from hsl_departures.domain.ports.key_value_store import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store, isolated per instance."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        """Initialize the store, optionally pre-populated."""
        self._data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes, or None if the key is absent."""
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        """Store bytes under a key."""
        self._data[key] = value

    def remove(self, key: str) -> None:
        """Remove a key if present."""
        self._data.pop(key, None)

    def keys(self) -> set[str]:
        """Return all stored keys."""
        return set(self._data.keys())
