from __future__ import annotations


class SchemaError(ValueError):
    # Base for definition-time schema errors (programmer errors, fail fast).
    pass


class InvalidArgumentError(SchemaError):
    # Malformed id, collection id or multi-bind argument; index is 1-based when known.
    def __init__(self, message: str, *, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index
