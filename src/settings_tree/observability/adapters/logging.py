from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Protocol, TextIO, runtime_checkable

from settings_tree.config.models import LoggingConfig
from settings_tree.observability.domain.logging import LogMessage


# LogSink is the port for structured log adapters.
@runtime_checkable
class LogSink(Protocol):
    def emit(self, message: LogMessage) -> None:
        """Consume one LogMessage."""
        raise NotImplementedError("LogSink is a port; use a concrete adapter.")


class StdoutLogSink:
    # Compact JSON line per message on stdout, or on the given stream.
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def emit(self, message: LogMessage) -> None:
        payload = json.dumps(_log_to_dict(message), separators=(",", ":"), ensure_ascii=False, default=str)
        print(payload, file=self._stream if self._stream is not None else sys.stdout)


class JsonlLogSink:
    # File-backed structured log sink for composition diagnostics.
    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self._path.open("a", encoding="utf-8")

    def emit(self, message: LogMessage) -> None:
        payload = json.dumps(_log_to_dict(message), separators=(",", ":"), ensure_ascii=False, default=str)
        self._file.write(payload + "\n")
        self._file.flush()

    def close(self) -> None:
        self._file.close()


def build_log_sink(config: LoggingConfig, *, stream: TextIO | None = None) -> StdoutLogSink | JsonlLogSink | None:
    # Disabled logging yields no sink; a path selects the JSONL sink, otherwise stdout (or stream).
    if not config.enabled:
        return None
    if config.path:
        return JsonlLogSink(Path(config.path))
    return StdoutLogSink(stream)


def _log_to_dict(message: LogMessage) -> dict[str, object]:
    return {
        "level": message.level,
        "message": message.message,
        "timestamp": message.timestamp.isoformat().replace("+00:00", "Z"),
        "fields": message.fields,
    }
