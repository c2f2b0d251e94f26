from __future__ import annotations

from typing import Protocol, runtime_checkable

from pipe_stream.domain.signals import WriteResult


# ByteSink port: accepts transformed output and reports its capacity after every write.
@runtime_checkable
class ByteSink(Protocol):
    def write(self, chunk: bytes) -> WriteResult:
        """Accept one chunk and report more-capacity, at-capacity or terminated."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("ByteSink is a port; use a concrete adapter.")

    def close(self) -> None:
        """Flush and release the sink. Must be idempotent."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("ByteSink is a port; use a concrete adapter.")
