from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import yaml

from settings_tree.app.contributions import apply_contributions, discover_contributions, import_modules
from settings_tree.config.loader import load_default_table
from settings_tree.config.models import SchemaAppConfig
from settings_tree.lens.lens import Fallback
from settings_tree.observability.adapters.logging import LogSink
from settings_tree.observability.domain.logging import LogMessage
from settings_tree.schema.nodes import Tree
from settings_tree.schema.registry import TreeRegistry


@dataclass(frozen=True, slots=True)
class ComposedSchema:
    # Result of composing a schema: the live graph stays available for Lens access.
    tree: Tree
    registry: TreeRegistry
    snapshot: dict[str, object]
    collection_id: str | None
    fallback: Fallback | None = None

    def document(self) -> dict[str, object]:
        return {"collection_id": self.collection_id, "tree": self.snapshot}


def compose_schema(
    config: SchemaAppConfig,
    *,
    base_dir: Path | None = None,
    registry: TreeRegistry | None = None,
    log: LogSink | None = None,
) -> ComposedSchema:
    """Create the root tree, let configured modules extend it, then build it.

    Relative ``defaults`` paths resolve against ``base_dir`` (usually the
    config file's directory).
    """
    registry = registry if registry is not None else TreeRegistry()
    root = registry.register(Tree(config.root, collection_id=config.collection_id))
    if log is not None:
        log.emit(
            LogMessage.info("schema.compose.start", root=config.root, modules=list(config.modules))
        )

    contributions = discover_contributions(import_modules(config.modules))
    apply_contributions(registry, contributions, log=log)

    fallback = None
    if config.defaults is not None:
        defaults_path = Path(config.defaults)
        if base_dir is not None and not defaults_path.is_absolute():
            defaults_path = base_dir / defaults_path
        fallback = load_default_table(defaults_path)

    snapshot, collection_id = root.build()
    if log is not None:
        log.emit(
            LogMessage.info(
                "schema.build.done",
                root=config.root,
                collection_id=collection_id,
                contributions=len(contributions),
                nodes=sum(1 for _ in root.walk()),
            )
        )
    return ComposedSchema(
        tree=root,
        registry=registry,
        snapshot=snapshot,
        collection_id=collection_id,
        fallback=fallback,
    )


def render_document(composed: ComposedSchema, fmt: str = "json") -> str:
    document = composed.document()
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
    if fmt == "json":
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
    raise ValueError(f"Unsupported output format: {fmt!r}")
