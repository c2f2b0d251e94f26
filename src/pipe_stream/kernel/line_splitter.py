from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from pipe_stream.domain.case_fold import fold_case
from pipe_stream.kernel.buffer import UnconsumedBuffer

NEWLINE = b"\n"

Transform = Callable[[bytes], bytes]


@dataclass(frozen=True, slots=True)
class SplitResult:
    # Transformed records of one split call, each re-terminated with the delimiter.
    output: bytes
    records: int
    consumed: int

    @property
    def produced(self) -> bool:
        return self.records > 0


def check_delimiter(delimiter: bytes) -> bytes:
    if not isinstance(delimiter, (bytes, bytearray)) or len(delimiter) != 1:
        raise ValueError("Record delimiter must be exactly one byte")
    return bytes(delimiter)


def split_lines(
    buffer: UnconsumedBuffer,
    *,
    delimiter: bytes = NEWLINE,
    transform: Transform = fold_case,
) -> SplitResult:
    """Extract every complete record from the front of ``buffer``.

    The buffer's logical start is advanced past each record and its delimiter; an
    unterminated trailing span is left in place for the next call. Nothing is
    released here: the caller decides when the consumed prefix is dropped.
    """
    delimiter = check_delimiter(delimiter)
    output = bytearray()
    records = 0
    consumed = 0
    while True:
        position = buffer.find(delimiter)
        if position < 0:
            break
        output += transform(buffer.take(position))
        output += delimiter
        buffer.advance(1)
        records += 1
        consumed += position + 1
    return SplitResult(output=bytes(output), records=records, consumed=consumed)
