from .errors import InvalidArgumentError, SchemaError
from .path import PATH_DELIMITER, NodePath, PathOwner, child_path, join_path
from .nodes import Attachable, Page, Setting, Tree
from .build import build_snapshot, build_tree
from .registry import TreeRegistry, UnknownTreeError, find

__all__ = [
    "PATH_DELIMITER",
    "Attachable",
    "InvalidArgumentError",
    "NodePath",
    "Page",
    "PathOwner",
    "SchemaError",
    "Setting",
    "Tree",
    "TreeRegistry",
    "UnknownTreeError",
    "build_snapshot",
    "build_tree",
    "child_path",
    "find",
    "join_path",
]
