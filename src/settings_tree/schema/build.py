from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import TYPE_CHECKING

from settings_tree.schema.path import PathOwner

if TYPE_CHECKING:
    from settings_tree.schema.nodes import Tree


def build_snapshot(node: PathOwner) -> dict[str, object]:
    # Field-by-field projection; nested nodes are replaced by their own snapshots.
    out: dict[str, object] = {}
    for name, value in node.snapshot_fields().items():
        out[name] = _plain(value)
    return out


def build_tree(tree: Tree) -> tuple[dict[str, object], str | None]:
    """Serialize a live tree into a plain value tree.

    Returns ``(snapshot, collection_id)``. A present collection id means the
    snapshot is spliced under that existing root; ``None`` means it registers
    as a new one. The live graph is not modified and stays Lens-addressable.
    """
    return build_snapshot(tree), tree.collection_id


def _plain(value: object) -> object:
    if isinstance(value, PathOwner):
        return build_snapshot(value)
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, (set, frozenset)):
        # Sets become lists in a stable order so JSON/YAML output is reproducible.
        return [_plain(item) for item in sorted(value, key=repr)]
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    # Scalars and opaque defaults are copied so snapshots share no state with the graph.
    return copy.deepcopy(value)
