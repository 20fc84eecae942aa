from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from settings_tree.app.runtime import compose_schema, render_document
from settings_tree.config.loader import load_config
from settings_tree.config.models import SchemaAppConfig
from settings_tree.observability.adapters.logging import JsonlLogSink, build_log_sink

# Thin wrapper around compose_schema: parse flags, apply overrides, write the document.


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="settings-tree", description="Compose and build a settings schema tree")
    parser.add_argument("--config", required=True, help="Path to YAML config")
    parser.add_argument("--output", help="Override output file path")
    parser.add_argument("--format", choices=["json", "yaml"], help="Override output format")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def apply_output_overrides(config: SchemaAppConfig, args: argparse.Namespace) -> None:
    # CLI overrides take precedence over config.
    if args.output is not None:
        config.output.file_path = args.output
    if args.format is not None:
        config.output.format = args.format


def run(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    config_path = Path(args.config)
    config = load_config(config_path)
    apply_output_overrides(config, args)

    # The document owns stdout when no output file is set; console logs move to stderr.
    log_stream = None if config.output.file_path else sys.stderr
    log = build_log_sink(config.logging, stream=log_stream)
    try:
        composed = compose_schema(config, base_dir=config_path.parent, log=log)
    finally:
        if isinstance(log, JsonlLogSink):
            log.close()

    text = render_document(composed, config.output.format)
    if config.output.file_path:
        output_path = Path(config.output.file_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
    else:
        print(text, end="")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    return run(list(argv) if argv is not None else None)
