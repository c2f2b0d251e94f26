from __future__ import annotations

import time
from dataclasses import asdict, dataclass

from pipe_stream.domain.case_fold import fold_case
from pipe_stream.domain.errors import IncompleteRecordError
from pipe_stream.domain.signals import CapacityState, StopReason
from pipe_stream.kernel.buffer import UnconsumedBuffer
from pipe_stream.kernel.line_splitter import NEWLINE, Transform, check_delimiter, split_lines
from pipe_stream.observability.adapters.logging import emit_log
from pipe_stream.ports.byte_sink import ByteSink
from pipe_stream.ports.chunk_source import ChunkSource
from pipe_stream.ports.log_sink import LogSink


@dataclass(slots=True)
class RunReport:
    # Counters of one pipeline run; stop stays None when the run failed.
    stop: StopReason | None = None
    reads: int = 0
    writes: int = 0
    records: int = 0
    bytes_read: int = 0
    bytes_written: int = 0
    bytes_released: int = 0

    def as_fields(self) -> dict[str, object]:
        fields = asdict(self)
        fields["stop"] = self.stop.value if self.stop is not None else None
        return fields


class Pump:
    """Flow-controlled loop moving newline-delimited records from a source to a sink.

    One iteration pulls a chunk, appends it to the unconsumed buffer, writes every
    complete (transformed) record to the sink and then releases exactly the bytes
    those records occupied. The sink's capacity signal decides whether another
    read is attempted. Source and sink are closed exactly once on every exit path.
    A Pump instance performs a single run.
    """

    def __init__(
        self,
        source: ChunkSource,
        sink: ByteSink,
        *,
        delimiter: bytes = NEWLINE,
        transform: Transform = fold_case,
        log: LogSink | None = None,
        buffer: UnconsumedBuffer | None = None,
    ) -> None:
        self._source = source
        self._sink = sink
        self._delimiter = check_delimiter(delimiter)
        self._transform = transform
        self._log = log
        self._buffer = buffer if buffer is not None else UnconsumedBuffer()
        self._started = False

    def run(self) -> RunReport:
        if self._started:
            raise RuntimeError("A pipeline run is not restartable; build a new Pump")
        self._started = True
        report = RunReport()
        started_at = time.perf_counter()
        emit_log(self._log, "info", "run.start", delimiter=self._delimiter.hex())
        try:
            report.stop = self._loop(report)
        except Exception as exc:
            # Failures are terminal for the run: log and re-raise, cleanup runs below.
            emit_log(
                self._log,
                "error",
                "run.failed",
                error_type=type(exc).__name__,
                error=str(exc),
                **report.as_fields(),
            )
            raise
        finally:
            self._close_collaborators()
        emit_log(
            self._log,
            "info",
            "run.stop",
            elapsed_ms=round((time.perf_counter() - started_at) * 1000, 3),
            **report.as_fields(),
        )
        return report

    def _loop(self, report: RunReport) -> StopReason:
        buffer = self._buffer
        while True:
            result = self._source.read()
            report.reads += 1
            if result.is_cancelled:
                return StopReason.CANCELLED
            report.bytes_read += len(result.chunk)
            buffer.append(result.chunk)

            capacity: CapacityState | None = None
            records = 0
            try:
                split = split_lines(buffer, delimiter=self._delimiter, transform=self._transform)
                records = split.records
                report.records += split.records
                if split.produced:
                    written = self._sink.write(split.output)
                    report.writes += 1
                    report.bytes_written += len(split.output)
                    capacity = written.state
                    if written.should_stop:
                        if result.is_end and buffer:
                            # Write outcome is checked before end-of-data, so this residual goes unreported.
                            emit_log(self._log, "warning", "run.residual_masked", residual=len(buffer))
                        if capacity is CapacityState.TERMINATED:
                            return StopReason.SINK_TERMINATED
                        return StopReason.SINK_AT_CAPACITY

                if result.is_end:
                    if buffer:
                        raise IncompleteRecordError(len(buffer))
                    return StopReason.END_OF_DATA
            finally:
                released = buffer.release()
                report.bytes_released += released
                emit_log(
                    self._log,
                    "debug",
                    "run.iteration",
                    read=len(result.chunk),
                    records=records,
                    released=released,
                    pending=len(buffer),
                    capacity=capacity.value if capacity is not None else None,
                )

    def _close_collaborators(self) -> None:
        try:
            self._source.close()
        finally:
            self._sink.close()
