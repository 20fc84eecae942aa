from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from settings_tree.schema.nodes import Attachable, Tree
from settings_tree.schema.path import PathOwner


class UnknownTreeError(KeyError):
    pass


@dataclass
class TreeRegistry:
    # Registry maps root ids to live trees so other modules can attach to them.
    _trees: dict[str, Tree] = field(default_factory=dict)

    def register(self, tree: Tree) -> Tree:
        # Registration is explicit; re-registering an id replaces the previous tree.
        if not isinstance(tree, Tree):
            raise TypeError(f"TreeRegistry.register expects a Tree, got {type(tree).__name__}")
        self._trees[tree.id] = tree
        return tree

    def get(self, tree_id: str) -> Tree:
        if tree_id not in self._trees:
            raise UnknownTreeError(tree_id)
        return self._trees[tree_id]

    def names(self) -> list[str]:
        return sorted(self._trees)

    def __contains__(self, tree_id: object) -> bool:
        return tree_id in self._trees


def find(tree: Tree, path: Sequence[str]) -> PathOwner | None:
    """Locate a node below (or at) ``tree`` by its full path; None when nothing matches.

    Matching uses each node's recorded path. Nodes attached under a subtree
    before that subtree was itself attached keep their shorter path and are
    not reachable here; ``Tree.walk`` still yields them.
    """
    target = tuple(path)
    if target[: len(tree.path)] != tree.path:
        return None
    current: PathOwner = tree
    while current.path != target:
        if not isinstance(current, Attachable):
            return None
        prefix = target[: len(current.path) + 1]
        match = next((child for child in current.children if child.path == prefix), None)
        if match is None:
            return None
        current = match
    return current
