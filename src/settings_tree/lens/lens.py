from __future__ import annotations

from collections.abc import Callable, Sequence

from settings_tree.integration.kv_store import KVStore, validate_store
from settings_tree.schema.path import join_path

# Fallback functions receive the node path and return a value (None means "no value").
Fallback = Callable[[Sequence[str]], object]


class Lens:
    """Store-backed accessor mixed into Setting nodes.

    Resolution order for ``get``: external store, then the caller's fallback,
    then the static default. ``None`` at any tier falls through to the next.
    Hosts provide ``path`` and ``default``.
    """

    path: tuple[str, ...]
    default: object

    def __init__(self, store: KVStore | None = None) -> None:
        self._store = None if store is None else validate_store(store)

    @property
    def store(self) -> KVStore | None:
        return self._store

    def bind_store(self, store: KVStore | None) -> None:
        self._store = None if store is None else validate_store(store)

    def key(self) -> str:
        return join_path(self.path)

    def get(self, fallback: Fallback | None = None) -> object:
        if self._store is not None:
            value = self._store.get(self.key())
            if value is not None:
                return value
        if fallback is not None:
            # Lookup errors from a malformed fallback table propagate to the caller.
            value = fallback(self.path)
            if value is not None:
                return value
        return self.default

    def set(self, value: object) -> None:
        # Without a store there is nowhere to write; not an error.
        if self._store is None:
            return
        self._store.set(self.key(), value)
