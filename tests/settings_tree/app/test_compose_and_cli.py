from __future__ import annotations

import json
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
import yaml

from settings_tree.app import ComposedSchema, compose_schema, render_document
from settings_tree.app.cli import apply_output_overrides, parse_args, run
from settings_tree.config import SchemaAppConfig
from settings_tree.integration import InMemoryKvStore
from settings_tree.schema import Page, Setting, find

_CONTRIB_SOURCE = '''
from settings_tree.app import contributes
from settings_tree.schema import Page, Setting, Tree


@contributes(tree="Root")
def stuff(root):
    (page,) = root.pages(Page("Stuff"))
    page.settings(Setting("Gubbin", False), Setting("Count", 1))


@contributes(tree="Root")
def advanced(root):
    (sub,) = root.subtrees(Tree("Advanced"))
    (net,) = sub.pages(Page("Network"))
    net.settings(Setting("Timeout", 30))
'''


class _RecordingSink:
    def __init__(self) -> None:
        self.messages: list[object] = []

    def emit(self, message: object) -> None:
        self.messages.append(message)


@pytest.fixture
def contrib_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    # Importable contribution module on a temporary sys.path entry.
    name = "settings_tree_test_contrib"
    (tmp_path / f"{name}.py").write_text(_CONTRIB_SOURCE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, name, raising=False)
    yield name
    sys.modules.pop(name, None)


def test_compose_schema_builds_contributed_tree(tmp_path: Path, contrib_module: str) -> None:
    (tmp_path / "defaults.yml").write_text("Root:\n  Stuff:\n    Gubbin: 3.141\n", encoding="utf-8")
    config = SchemaAppConfig(root="Root", collection_id="Existing", modules=[contrib_module], defaults="defaults.yml")
    sink = _RecordingSink()
    composed = compose_schema(config, base_dir=tmp_path, log=sink)

    assert composed.collection_id == "Existing"
    assert composed.registry.get("Root") is composed.tree
    assert [child["id"] for child in composed.snapshot["children"]] == ["Stuff", "Advanced"]
    assert composed.document()["collection_id"] == "Existing"
    messages = [m.message for m in sink.messages]  # type: ignore[attr-defined]
    assert messages[0] == "schema.compose.start"
    assert messages[-1] == "schema.build.done"
    assert messages.count("schema.contribution.applied") == 2

    # Live settings stay addressable and use the configured fallback table.
    gubbin = find(composed.tree, ("Root", "Stuff", "Gubbin"))
    assert isinstance(gubbin, Setting)
    composed.tree.bind_store(InMemoryKvStore())
    assert gubbin.get(composed.fallback) == 3.141
    gubbin.set(True)
    assert gubbin.get(composed.fallback) is True


def test_compose_schema_without_modules() -> None:
    composed = compose_schema(SchemaAppConfig(root="Lonely"))
    assert composed.collection_id is None
    assert composed.fallback is None
    assert composed.snapshot["children"] == []


def test_render_document_formats(contrib_module: str) -> None:
    composed = compose_schema(SchemaAppConfig(root="Root", modules=[contrib_module]))
    assert json.loads(render_document(composed, "json")) == composed.document()
    assert yaml.safe_load(render_document(composed, "yaml")) == composed.document()
    with pytest.raises(ValueError):
        render_document(composed, "xml")


def test_parse_args_and_overrides() -> None:
    args = parse_args(["--config", "schema.yml", "--output", "out.yml", "--format", "yaml"])
    config = SchemaAppConfig(root="Root")
    apply_output_overrides(config, args)
    assert config.output.file_path == "out.yml"
    assert config.output.format == "yaml"


def test_cli_run_writes_document(tmp_path: Path, contrib_module: str) -> None:
    config_path = tmp_path / "schema.yml"
    log_path = tmp_path / "logs" / "schema.jsonl"
    config_path.write_text(
        f"root: Root\nmodules: [{contrib_module}]\nlogging:\n  enabled: true\n  path: {log_path}\n",
        encoding="utf-8",
    )
    output = tmp_path / "out" / "schema.json"
    assert run(["--config", str(config_path), "--output", str(output)]) == 0

    document = json.loads(output.read_text(encoding="utf-8"))
    assert document["collection_id"] is None
    assert document["tree"]["path"] == ["Root"]
    advanced = document["tree"]["children"][1]
    assert advanced["children"][0]["settings"][0]["path"] == ["Root", "Advanced", "Network", "Timeout"]
    assert log_path.exists()


def test_cli_run_prints_to_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "schema.yml"
    config_path.write_text("root: Root\noutput:\n  format: yaml\n", encoding="utf-8")
    assert run(["--config", str(config_path)]) == 0
    document = yaml.safe_load(capsys.readouterr().out)
    assert document == {
        "collection_id": None,
        "tree": {"kind": "tree", "id": "Root", "path": ["Root"], "collection_id": None, "children": []},
    }


def test_cli_console_logs_do_not_mix_with_stdout_document(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    # With the document on stdout, console log lines go to stderr.
    config_path = tmp_path / "schema.yml"
    config_path.write_text("root: Root\nlogging:\n  enabled: true\n", encoding="utf-8")
    assert run(["--config", str(config_path)]) == 0
    captured = capsys.readouterr()
    document = json.loads(captured.out)
    assert document["tree"]["id"] == "Root"
    messages = [json.loads(line)["message"] for line in captured.err.splitlines()]
    assert messages == ["schema.compose.start", "schema.build.done"]


def test_render_document_handles_set_defaults() -> None:
    composed = compose_schema(SchemaAppConfig(root="Root"))
    (page,) = composed.tree.pages(Page("Tags"))
    page.settings(Setting("Enabled", {"b", "a"}))
    snapshot, collection_id = composed.tree.build()
    rebuilt = ComposedSchema(
        tree=composed.tree, registry=composed.registry, snapshot=snapshot, collection_id=collection_id
    )
    document = json.loads(render_document(rebuilt, "json"))
    assert document["tree"]["children"][0]["settings"][0]["default"] == ["a", "b"]
