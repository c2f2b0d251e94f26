from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO

from pipe_stream.domain.case_fold import fold_case
from pipe_stream.kernel.line_splitter import NEWLINE, Transform
from pipe_stream.observability.adapters.logging import emit_log
from pipe_stream.ports.log_sink import LogSink


@dataclass(slots=True)
class LineCopyReport:
    lines: int = 0
    bytes_written: int = 0
    unterminated_tail: bool = False


def copy_lines(
    reader: BinaryIO,
    writer: BinaryIO,
    *,
    transform: Transform = fold_case,
    log: LogSink | None = None,
) -> LineCopyReport:
    """Line-at-a-time copy: the simple readline() strategy, without flow control.

    Lines are split on LF only; a CR directly before the LF is dropped, so CRLF
    input comes out as LF. A lone CR is line content. A final line without a
    terminator is still written (terminated). There is no capacity signal and
    no cancellation; use the pump for those.
    """
    report = LineCopyReport()
    for line in reader:
        if line.endswith(NEWLINE):
            line = line[:-1]
            if line.endswith(b"\r"):
                line = line[:-1]
        else:
            report.unterminated_tail = True
        written = transform(line) + NEWLINE
        writer.write(written)
        report.lines += 1
        report.bytes_written += len(written)
    writer.flush()
    emit_log(
        log,
        "info",
        "readline.stop",
        lines=report.lines,
        bytes_written=report.bytes_written,
        unterminated_tail=report.unterminated_tail,
    )
    return report
