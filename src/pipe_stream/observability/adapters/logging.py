from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TextIO

from pipe_stream.adapters.contracts import adapter
from pipe_stream.observability.domain.logging import LOG_LEVELS, LogMessage
from pipe_stream.ports.log_sink import LogSink


class StreamLogSink:
    # Structured log sink over a text stream; stderr by default so stdout stays free for data.
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def emit(self, message: LogMessage) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        print(json.dumps(_log_to_dict(message), separators=(",", ":"), ensure_ascii=False), file=stream)


class JsonlLogSink:
    # File-backed structured log sink for run diagnostics.
    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file: TextIO | None = self._path.open("a", encoding="utf-8")

    def emit(self, message: LogMessage) -> None:
        if self._file is None:
            raise ValueError("JsonlLogSink is closed")
        payload = json.dumps(_log_to_dict(message), separators=(",", ":"), ensure_ascii=False)
        self._file.write(payload + "\n")
        self._file.flush()

    def close(self) -> None:
        if self._file is None:
            return
        self._file.close()
        self._file = None


class LevelFilterLogSink:
    # Drops messages below the configured level before delegating.
    def __init__(self, inner: LogSink, level: str = "info") -> None:
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {level}")
        self._inner = inner
        self._threshold = LOG_LEVELS[level]

    def emit(self, message: LogMessage) -> None:
        if message.severity >= self._threshold:
            self._inner.emit(message)

    def close(self) -> None:
        close = getattr(self._inner, "close", None)
        if callable(close):
            close()


def emit_log(sink: LogSink | None, level: str, message: str, /, **fields: object) -> None:
    # Logging is optional for every component; a missing sink means silence.
    # Positional-only, so any field name (sink, level, message) is accepted.
    if sink is None:
        return
    sink.emit(LogMessage(level=level, message=message, fields=fields))


@adapter(role="log", kind="stderr")
def log_stderr(settings: dict[str, object]) -> StreamLogSink:
    _ = settings
    return StreamLogSink()


@adapter(role="log", kind="stdout")
def log_stdout(settings: dict[str, object]) -> StreamLogSink:
    _ = settings
    return StreamLogSink(sys.stdout)


@adapter(role="log", kind="jsonl")
def log_jsonl(settings: dict[str, object]) -> JsonlLogSink:
    path = settings.get("path")
    if not isinstance(path, str) or not path:
        raise ValueError("log.jsonl.settings.path must be a non-empty string")
    return JsonlLogSink(Path(path))


def _log_to_dict(message: LogMessage) -> dict[str, object]:
    return {
        "level": message.level,
        "message": message.message,
        "timestamp": message.timestamp.isoformat().replace("+00:00", "Z"),
        "fields": message.fields,
    }
