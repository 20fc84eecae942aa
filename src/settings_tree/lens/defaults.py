from __future__ import annotations

from collections.abc import Mapping, Sequence

from settings_tree.lens.lens import Fallback


class MissingKeyError(KeyError):
    # A fallback table does not match the schema shape (misconfiguration, not absence).
    def __init__(self, path: Sequence[str], segment: str) -> None:
        self.path = tuple(path)
        self.segment = segment
        super().__init__(f"Default table has no '{segment}' along path {'/'.join(self.path)!r}")

    def __str__(self) -> str:
        return str(self.args[0])


def default_table(seed: object) -> Fallback:
    # Turn a nested mapping into a Lens fallback that walks it one segment at a time.
    def lookup(path: Sequence[str]) -> object:
        current = seed
        for segment in path:
            if not isinstance(current, Mapping) or segment not in current:
                raise MissingKeyError(path, segment)
            current = current[segment]
        return current

    return lookup
