from .kv_store import InMemoryKvStore, KVStore, validate_store

__all__ = ["InMemoryKvStore", "KVStore", "validate_store"]
