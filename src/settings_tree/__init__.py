# Import order matters: schema nodes pull in the Lens, which reads schema paths.
from .schema import (
    InvalidArgumentError,
    Page,
    PathOwner,
    SchemaError,
    Setting,
    Tree,
    TreeRegistry,
    UnknownTreeError,
    build_tree,
    find,
)
from .lens import Lens, MissingKeyError, default_table
from .integration import InMemoryKvStore, KVStore

__all__ = [
    "InMemoryKvStore",
    "InvalidArgumentError",
    "KVStore",
    "Lens",
    "MissingKeyError",
    "Page",
    "PathOwner",
    "SchemaError",
    "Setting",
    "Tree",
    "TreeRegistry",
    "UnknownTreeError",
    "build_tree",
    "default_table",
    "find",
]
