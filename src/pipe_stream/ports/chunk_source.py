from __future__ import annotations

from typing import Protocol, runtime_checkable

from pipe_stream.domain.signals import ReadResult


# ChunkSource port: a lazy, pull-based, non-restartable sequence of byte chunks.
@runtime_checkable
class ChunkSource(Protocol):
    def read(self) -> ReadResult:
        """Return the next chunk and whether more data, end-of-data, or cancellation follows."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("ChunkSource is a port; use a concrete adapter.")

    def close(self) -> None:
        """Release the underlying stream. Must be idempotent."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("ChunkSource is a port; use a concrete adapter.")
