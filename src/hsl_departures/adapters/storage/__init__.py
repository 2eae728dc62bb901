"""Key-value storage adapters."""

from hsl_departures.adapters.storage.file_key_value_store import FileKeyValueStore
from hsl_departures.adapters.storage.memory_key_value_store import InMemoryKeyValueStore

__all__ = ["FileKeyValueStore", "InMemoryKeyValueStore"]
