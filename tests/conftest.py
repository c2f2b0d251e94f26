from __future__ import annotations

from collections.abc import Iterable

import pytest

from pipe_stream.domain.signals import CapacityState, ReadResult, WriteResult


class ScriptedSource:
    # ChunkSource fake: replays scripted read results and counts reads/closes.
    def __init__(self, results: Iterable[ReadResult]) -> None:
        self._results = list(results)
        self.reads = 0
        self.closes = 0

    @classmethod
    def of(cls, chunks: Iterable[bytes]) -> ScriptedSource:
        # Each chunk is delivered as data; an empty end-of-data read follows.
        return cls([*(ReadResult.data(chunk) for chunk in chunks), ReadResult.end()])

    def read(self) -> ReadResult:
        if self.reads >= len(self._results):
            raise AssertionError("read() called after the scripted results were exhausted")
        result = self._results[self.reads]
        self.reads += 1
        return result

    def close(self) -> None:
        self.closes += 1


class FailingSource(ScriptedSource):
    # Raises once the scripted results are used up, to simulate an upstream failure.
    def __init__(self, results: Iterable[ReadResult], error: Exception) -> None:
        super().__init__(results)
        self._error = error

    def read(self) -> ReadResult:
        if self.reads >= len(self._results):
            self.reads += 1
            raise self._error
        return super().read()


class RecordingSink:
    # ByteSink fake: records writes and reports capacity according to its script.
    def __init__(
        self,
        *,
        at_capacity_after: int | None = None,
        terminate_after: int | None = None,
        error: Exception | None = None,
    ) -> None:
        self.writes: list[bytes] = []
        self.closes = 0
        self._at_capacity_after = at_capacity_after
        self._terminate_after = terminate_after
        self._error = error

    @property
    def data(self) -> bytes:
        return b"".join(self.writes)

    def write(self, chunk: bytes) -> WriteResult:
        if self._error is not None:
            raise self._error
        self.writes.append(chunk)
        count = len(self.writes)
        if self._terminate_after is not None and count >= self._terminate_after:
            return WriteResult(state=CapacityState.TERMINATED, accepted=len(chunk))
        if self._at_capacity_after is not None and count >= self._at_capacity_after:
            return WriteResult(state=CapacityState.AT_CAPACITY, accepted=len(chunk))
        return WriteResult(state=CapacityState.MORE_CAPACITY, accepted=len(chunk))

    def close(self) -> None:
        self.closes += 1


class MemoryLogSink:
    # LogSink fake keeping every emitted message.
    def __init__(self) -> None:
        self.messages = []

    def emit(self, message) -> None:
        self.messages.append(message)

    def names(self) -> list[str]:
        return [message.message for message in self.messages]


@pytest.fixture
def scripted_source() -> type[ScriptedSource]:
    return ScriptedSource


@pytest.fixture
def failing_source() -> type[FailingSource]:
    return FailingSource


@pytest.fixture
def recording_sink() -> type[RecordingSink]:
    return RecordingSink


@pytest.fixture
def memory_log() -> MemoryLogSink:
    return MemoryLogSink()
