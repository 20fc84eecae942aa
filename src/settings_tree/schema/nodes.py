from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, TypeVar

from settings_tree.integration.kv_store import KVStore
from settings_tree.lens.lens import Lens
from settings_tree.schema.build import build_tree
from settings_tree.schema.errors import InvalidArgumentError
from settings_tree.schema.path import PathOwner

C = TypeVar("C", bound=PathOwner)


class Attachable(PathOwner, Generic[C]):
    """Composite node holding an ordered list of attached children.

    ``_attach_all`` is the shared multi-bind contract: every argument is
    validated before any of them is attached, so a failing call leaves the
    parent untouched.
    """

    def __init__(self, node_id: str) -> None:
        super().__init__(node_id)
        self._children: list[PathOwner] = []

    @property
    def children(self) -> tuple[PathOwner, ...]:
        return tuple(self._children)

    def walk(self) -> Iterator[PathOwner]:
        # Depth-first, attach order, self first.
        yield self
        for child in self._children:
            if isinstance(child, Attachable):
                yield from child.walk()
            else:
                yield child

    def _attach_all(self, children: tuple[object, ...], child_types: tuple[type[PathOwner], ...]) -> tuple[C, ...]:
        seen: set[int] = set()
        for index, child in enumerate(children, start=1):
            if child is None:
                raise InvalidArgumentError(f"{self!r}: argument #{index} is missing", index=index)
            if not isinstance(child, child_types):
                expected = " or ".join(cls.__name__ for cls in child_types)
                raise InvalidArgumentError(
                    f"{self!r}: argument #{index} must be {expected}, got {type(child).__name__}",
                    index=index,
                )
            if child.attached:
                raise InvalidArgumentError(f"{self!r}: argument #{index} {child!r} is already attached", index=index)
            if id(child) in seen:
                raise InvalidArgumentError(f"{self!r}: argument #{index} {child!r} is passed twice", index=index)
            if isinstance(child, Attachable) and any(node is self for node in child.walk()):
                raise InvalidArgumentError(f"{self!r}: argument #{index} {child!r} would create a cycle", index=index)
            seen.add(id(child))

        attached: list[C] = []
        for child in children:
            assert isinstance(child, PathOwner)
            self._children.append(child)
            child.assign_path(self.path)
            attached.append(child)  # type: ignore[arg-type]
        return tuple(attached)


class Setting(PathOwner, Lens):
    # Leaf node: a default value plus Lens access to the external store.
    kind = "setting"

    def __init__(self, setting_id: str, default: object = None, *, store: KVStore | None = None) -> None:
        PathOwner.__init__(self, setting_id)
        Lens.__init__(self, store)
        self.default = default

    def snapshot_fields(self) -> dict[str, object]:
        fields = super().snapshot_fields()
        fields["default"] = self.default
        return fields


class Page(Attachable[Setting]):
    # Composite node holding Settings.
    kind = "page"

    def settings(self, *settings: Setting) -> tuple[Setting, ...]:
        return self._attach_all(settings, (Setting,))

    def snapshot_fields(self) -> dict[str, object]:
        fields = super().snapshot_fields()
        fields["settings"] = list(self._children)
        return fields


class Tree(Attachable[PathOwner]):
    """Composite node nesting Pages and other Trees.

    ``collection_id`` marks a tree to be spliced under an existing external
    root at build time instead of registering a new one; it never affects
    paths.
    """

    kind = "tree"

    def __init__(self, tree_id: str, *, collection_id: str | None = None) -> None:
        super().__init__(tree_id)
        self._collection_id: str | None = None
        self.collection_id = collection_id

    @property
    def collection_id(self) -> str | None:
        return self._collection_id

    @collection_id.setter
    def collection_id(self, value: str | None) -> None:
        if value is not None and (not isinstance(value, str) or not value):
            raise InvalidArgumentError(f"{self!r}: collection id must be a non-empty string, got {value!r}")
        self._collection_id = value

    def pages(self, *pages: Page) -> tuple[Page, ...]:
        return self._attach_all(pages, (Page,))  # type: ignore[return-value]

    def subtrees(self, *trees: Tree) -> tuple[Tree, ...]:
        return self._attach_all(trees, (Tree,))  # type: ignore[return-value]

    def settings_nodes(self) -> list[Setting]:
        return [node for node in self.walk() if isinstance(node, Setting)]

    def bind_store(self, store: KVStore) -> int:
        # Bind the store to every Setting that has none yet; returns how many were bound.
        bound = 0
        for setting in self.settings_nodes():
            if setting.store is None:
                setting.bind_store(store)
                bound += 1
        return bound

    def build(self) -> tuple[dict[str, object], str | None]:
        return build_tree(self)

    def snapshot_fields(self) -> dict[str, object]:
        fields = super().snapshot_fields()
        fields["collection_id"] = self._collection_id
        fields["children"] = list(self._children)
        return fields
