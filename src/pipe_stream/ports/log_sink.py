from __future__ import annotations

from typing import Protocol, runtime_checkable

from pipe_stream.observability.domain import LogMessage


# LogSink port receives structured log records from the pump and the runtime.
@runtime_checkable
class LogSink(Protocol):
    def emit(self, message: LogMessage) -> None:
        """Persist or print one structured log record."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("LogSink is a port; use a concrete adapter.")
