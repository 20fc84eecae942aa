from __future__ import annotations

from collections.abc import Mapping


class KVStore:
    # Keyed settings port read and written by Setting lenses under their joined path.
    def get(self, key: str) -> object | None:
        raise NotImplementedError("KVStore.get must be implemented")

    def set(self, key: str, value: object) -> None:
        raise NotImplementedError("KVStore.set must be implemented")

    def delete(self, key: str) -> None:
        raise NotImplementedError("KVStore.delete must be implemented")


def validate_store(store: object) -> KVStore:
    # Lenses only need get/set; any object exposing them is accepted.
    for name in ("get", "set"):
        if not callable(getattr(store, name, None)):
            raise TypeError(f"Settings store must provide a callable '{name}': {store!r}")
    return store  # type: ignore[return-value]


class InMemoryKvStore(KVStore):
    # In-memory KV adapter for deterministic local runs and tests.
    def __init__(self, initial: Mapping[str, object] | None = None) -> None:
        self._store: dict[str, object] = dict(initial or {})

    def get(self, key: str) -> object | None:
        return self._store.get(key)

    def set(self, key: str, value: object) -> None:
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def snapshot(self) -> dict[str, object]:
        return dict(self._store)
