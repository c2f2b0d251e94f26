from __future__ import annotations

import threading
from collections.abc import Callable
from typing import BinaryIO

from pipe_stream.domain.signals import CapacityState, ReadResult, WriteResult

DEFAULT_CHUNK_SIZE = 65_536


class StreamChunkSource:
    # ChunkSource over any binary stream: fixed-size pulls, end-of-data on the first empty read.
    def __init__(
        self,
        stream: BinaryIO,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        leave_open: bool = False,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._stream = stream
        self._chunk_size = chunk_size
        self._leave_open = leave_open
        self._cancelled = threading.Event()
        self._finished = False
        self._closed = False

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    def cancel(self) -> None:
        # Safe from another thread; observed by the next read().
        self._cancelled.set()

    def read(self) -> ReadResult:
        if self._cancelled.is_set():
            return ReadResult.cancelled()
        if self._closed:
            raise ValueError("Cannot read from a closed source")
        if self._finished:
            return ReadResult.end()
        # read1 returns whatever one underlying read yields, so slow producers are not waited on.
        read1 = getattr(self._stream, "read1", None)
        chunk = read1(self._chunk_size) if callable(read1) else self._stream.read(self._chunk_size)
        if not chunk:
            self._finished = True
            return ReadResult.end()
        return ReadResult.data(bytes(chunk))

    def close(self) -> None:
        # Close is idempotent; a left-open stream (stdin) is never closed here.
        if self._closed:
            return
        self._closed = True
        if not self._leave_open:
            self._stream.close()


class StreamSink:
    # ByteSink writing through to a binary stream, with an optional byte limit.
    def __init__(
        self,
        stream: BinaryIO,
        *,
        capacity_bytes: int | None = None,
        leave_open: bool = False,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        if capacity_bytes is not None and capacity_bytes <= 0:
            raise ValueError("capacity_bytes must be positive when set")
        self._stream = stream
        self._capacity_bytes = capacity_bytes
        self._leave_open = leave_open
        self._on_close = on_close
        self._written = 0
        self._completed = False
        self._closed = False

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    @property
    def written(self) -> int:
        return self._written

    def complete(self) -> None:
        # Consumer-side termination: later writes are refused with TERMINATED.
        self._completed = True

    def write(self, chunk: bytes) -> WriteResult:
        if self._completed or self._closed or getattr(self._stream, "closed", False):
            return WriteResult(state=CapacityState.TERMINATED, accepted=0)
        accepted = self._stream.write(chunk)
        if accepted is None:
            accepted = len(chunk)
        self._written += accepted
        if self._capacity_bytes is not None and self._written >= self._capacity_bytes:
            return WriteResult(state=CapacityState.AT_CAPACITY, accepted=accepted)
        return WriteResult(state=CapacityState.MORE_CAPACITY, accepted=accepted)

    def close(self) -> None:
        # Close is idempotent to simplify pump shutdown paths.
        if self._closed:
            return
        self._closed = True
        try:
            if not getattr(self._stream, "closed", False):
                self._stream.flush()
        finally:
            if not self._leave_open:
                self._stream.close()
        if self._on_close is not None:
            self._on_close()
