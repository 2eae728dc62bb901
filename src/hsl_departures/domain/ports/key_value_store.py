"""Key-value persistence port."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Byte-blob storage keyed by string.

    The namespace may be shared between processes; writes are visible to
    other processes eventually, not transactionally.
    """

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes, or None if the key is absent."""
        ...

    def set(self, key: str, value: bytes) -> None:
        """Store bytes under a key, replacing any previous value."""
        ...

    def remove(self, key: str) -> None:
        """Remove a key. Removing a missing key is a no-op."""
        ...
