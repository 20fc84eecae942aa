from __future__ import annotations

import importlib
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from types import ModuleType
from typing import TypeVar

from settings_tree.observability.adapters.logging import LogSink
from settings_tree.observability.domain.logging import LogMessage
from settings_tree.schema.nodes import Tree
from settings_tree.schema.registry import TreeRegistry

T = TypeVar("T", bound=Callable[[Tree], object])


class ContributionDiscoveryError(RuntimeError):
    # Raised when discovery finds duplicate contribution names.
    pass


@dataclass(frozen=True, slots=True)
class ContributionMeta:
    # Metadata attached to a function that extends a registered tree.
    name: str
    tree: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("ContributionMeta.name must be a non-empty string")
        if not self.tree:
            raise ValueError("ContributionMeta.tree must be a non-empty string")


@dataclass(frozen=True, slots=True)
class ContributionDef:
    meta: ContributionMeta
    target: Callable[[Tree], object]


def contributes(*, tree: str, name: str | None = None) -> Callable[[T], T]:
    """Mark a function as a contribution to the registered tree ``tree``.

    The function receives the live Tree and attaches pages, subtrees and
    settings to it. ``name`` defaults to the function's qualified module path.
    """

    def _decorate(target: T) -> T:
        meta = ContributionMeta(name=name or f"{target.__module__}.{target.__qualname__}", tree=tree)
        setattr(target, "__contribution_meta__", meta)
        return target

    return _decorate


def import_modules(names: Iterable[str]) -> list[ModuleType]:
    return [importlib.import_module(name) for name in names]


def discover_contributions(modules: list[ModuleType]) -> list[ContributionDef]:
    # Collect decorated callables in module order; re-exports of the same target are kept once.
    found: list[ContributionDef] = []
    seen_targets: dict[str, object] = {}
    for module in modules:
        for value in list(module.__dict__.values()):
            meta = getattr(value, "__contribution_meta__", None)
            if not isinstance(meta, ContributionMeta):
                continue
            if meta.name in seen_targets:
                if seen_targets[meta.name] is value:
                    continue
                raise ContributionDiscoveryError(f"Duplicate contribution name discovered: {meta.name}")
            seen_targets[meta.name] = value
            found.append(ContributionDef(meta=meta, target=value))
    return found


def apply_contributions(
    registry: TreeRegistry,
    contributions: Iterable[ContributionDef],
    *,
    log: LogSink | None = None,
) -> int:
    # Each contribution runs once against its target tree; unknown trees raise UnknownTreeError.
    applied = 0
    for contribution in contributions:
        tree = registry.get(contribution.meta.tree)
        contribution.target(tree)
        applied += 1
        if log is not None:
            log.emit(
                LogMessage.debug(
                    "schema.contribution.applied",
                    name=contribution.meta.name,
                    tree=contribution.meta.tree,
                )
            )
    return applied
