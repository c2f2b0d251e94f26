from __future__ import annotations

import sys

from pipe_stream.adapters.contracts import adapter
from pipe_stream.adapters.file_io import wrap_output
from pipe_stream.adapters.settings import optional_int
from pipe_stream.adapters.streams import DEFAULT_CHUNK_SIZE, StreamChunkSource, StreamSink


@adapter(role="source", kind="stdin")
def stdin_source(settings: dict[str, object]) -> StreamChunkSource:
    # Standard input is borrowed, not owned: it stays open after the run.
    chunk_size = optional_int(settings, "chunk_size", "source", DEFAULT_CHUNK_SIZE)
    assert chunk_size is not None
    return StreamChunkSource(sys.stdin.buffer, chunk_size=chunk_size, leave_open=True)


@adapter(role="sink", kind="stdout")
def stdout_sink(settings: dict[str, object]) -> StreamSink:
    # Flushed on close but left open, so later output on stdout still works.
    capacity_bytes = optional_int(settings, "capacity_bytes", "sink", None)
    return StreamSink(wrap_output(sys.stdout.buffer, settings), capacity_bytes=capacity_bytes, leave_open=True)
