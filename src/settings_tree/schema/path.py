from __future__ import annotations

from collections.abc import Sequence

from settings_tree.schema.errors import InvalidArgumentError

PATH_DELIMITER = "/"

# Paths are tuples so a parent's path can never be mutated under its children.
NodePath = tuple[str, ...]


def validate_node_id(node_id: object, *, kind: str) -> str:
    if not isinstance(node_id, str) or not node_id:
        raise InvalidArgumentError(f"{kind} id must be a non-empty string, got {node_id!r}")
    return node_id


def child_path(parent_path: Sequence[str], node_id: str) -> NodePath:
    # Fresh copy of the parent path plus the child id.
    return (*parent_path, node_id)


def join_path(path: Sequence[str], delimiter: str = PATH_DELIMITER) -> str:
    # Segments are not escaped; ids containing the delimiter may collide.
    return delimiter.join(path)


class PathOwner:
    """Identity and fully-qualified path shared by every schema node.

    A fresh node owns the provisional path ``(id,)``. Roots keep it; every other
    node gets its real path exactly once, when a parent attaches it.
    """

    kind = "node"

    def __init__(self, node_id: str) -> None:
        self._id = validate_node_id(node_id, kind=type(self).__name__)
        self._path: NodePath = (self._id,)
        self._attached = False

    @property
    def id(self) -> str:
        return self._id

    @property
    def path(self) -> NodePath:
        return self._path

    @property
    def attached(self) -> bool:
        return self._attached

    def assign_path(self, parent_path: Sequence[str]) -> None:
        # One-shot: attach order matters, later parent changes never propagate.
        if self._attached:
            raise InvalidArgumentError(f"{type(self).__name__} '{self._id}' is already attached")
        self._path = child_path(parent_path, self._id)
        self._attached = True

    def snapshot_fields(self) -> dict[str, object]:
        # Public fields copied into a build snapshot; bookkeeping stays out.
        return {"kind": self.kind, "id": self._id, "path": list(self._path)}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({join_path(self._path)!r})"
