from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SourceState(str, Enum):
    # Outcome of one pull from a chunk source.
    DATA_AVAILABLE = "data_available"
    END_OF_DATA = "end_of_data"
    CANCELLED = "cancelled"


class CapacityState(str, Enum):
    # Sink capacity signal returned after every write.
    MORE_CAPACITY = "more_capacity"
    AT_CAPACITY = "at_capacity"
    TERMINATED = "terminated"


class StopReason(str, Enum):
    # Why a pipeline run left its loop without an error.
    END_OF_DATA = "end_of_data"
    CANCELLED = "cancelled"
    SINK_AT_CAPACITY = "sink_at_capacity"
    SINK_TERMINATED = "sink_terminated"


@dataclass(frozen=True, slots=True)
class ReadResult:
    # One source read; an END_OF_DATA result may still carry a final chunk.
    chunk: bytes
    state: SourceState = SourceState.DATA_AVAILABLE

    @classmethod
    def data(cls, chunk: bytes) -> ReadResult:
        return cls(chunk=chunk, state=SourceState.DATA_AVAILABLE)

    @classmethod
    def end(cls, chunk: bytes = b"") -> ReadResult:
        return cls(chunk=chunk, state=SourceState.END_OF_DATA)

    @classmethod
    def cancelled(cls) -> ReadResult:
        return cls(chunk=b"", state=SourceState.CANCELLED)

    @property
    def is_end(self) -> bool:
        return self.state is SourceState.END_OF_DATA

    @property
    def is_cancelled(self) -> bool:
        return self.state is SourceState.CANCELLED


@dataclass(frozen=True, slots=True)
class WriteResult:
    # Capacity signal plus the number of bytes the sink accepted.
    state: CapacityState = CapacityState.MORE_CAPACITY
    accepted: int = 0

    @property
    def should_stop(self) -> bool:
        return self.state is not CapacityState.MORE_CAPACITY
