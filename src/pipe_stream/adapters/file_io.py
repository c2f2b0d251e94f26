from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO

from pipe_stream.adapters.contracts import adapter
from pipe_stream.adapters.settings import optional_int, require_path
from pipe_stream.adapters.streams import DEFAULT_CHUNK_SIZE, StreamChunkSource, StreamSink
from pipe_stream.domain.case_fold import fold_case
from pipe_stream.kernel.transforming_stream import TransformingStream


def wrap_output(stream: BinaryIO, settings: dict[str, object]) -> BinaryIO:
    # fold_case wraps the target in the case-folding decorator, so the write path folds too.
    if bool(settings.get("fold_case", True)):
        return TransformingStream(stream, fold_case)  # type: ignore[return-value]
    return stream


@adapter(role="source", kind="file")
def file_source(settings: dict[str, object]) -> StreamChunkSource:
    # Binary, chunked file reads; the file is never loaded whole.
    path = require_path(settings, "path", "source")
    chunk_size = optional_int(settings, "chunk_size", "source", DEFAULT_CHUNK_SIZE)
    assert chunk_size is not None
    return StreamChunkSource(path.open("rb"), chunk_size=chunk_size)


@adapter(role="sink", kind="file")
def file_sink(settings: dict[str, object]) -> StreamSink:
    path = require_path(settings, "path", "sink")
    capacity_bytes = optional_int(settings, "capacity_bytes", "sink", None)
    on_close: Callable[[], None] | None = None
    target = path
    if bool(settings.get("atomic_replace", False)):
        # Write to a temp file first; close commits it to the final path.
        target = path.with_suffix(path.suffix + ".tmp")

        def on_close() -> None:
            target.replace(path)

    stream = wrap_output(target.open("wb"), settings)
    return StreamSink(stream, capacity_bytes=capacity_bytes, on_close=on_close)
