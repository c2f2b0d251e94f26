from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from pipe_stream.domain.errors import IncompleteRecordError
from pipe_stream.domain.signals import ReadResult, WriteResult
from pipe_stream.kernel.buffer import UnconsumedBuffer
from pipe_stream.kernel.line_splitter import split_lines
from pipe_stream.kernel.pump import Pump


# Local collaborators: hypothesis re-runs the test body, so function-scoped fixtures are avoided.
class _ListSource:
    def __init__(self, chunks: list[bytes]) -> None:
        self._chunks = list(chunks)

    def read(self) -> ReadResult:
        if not self._chunks:
            return ReadResult.end()
        return ReadResult.data(self._chunks.pop(0))

    def close(self) -> None:
        pass


class _BytesSink:
    def __init__(self) -> None:
        self.data = bytearray()

    def write(self, chunk: bytes) -> WriteResult:
        self.data += chunk
        return WriteResult(accepted=len(chunk))

    def close(self) -> None:
        pass


def _chunked(data: bytes, cuts: list[int]) -> list[bytes]:
    chunks = []
    previous = 0
    for point in sorted({min(cut, len(data)) for cut in cuts}):
        chunks.append(data[previous:point])
        previous = point
    chunks.append(data[previous:])
    return chunks


def _one_pass(data: bytes) -> bytes:
    buffer = UnconsumedBuffer()
    buffer.append(data)
    return split_lines(buffer).output


_records = st.lists(st.binary(max_size=20).filter(lambda value: b"\n" not in value), max_size=20)
_cuts = st.lists(st.integers(min_value=0, max_value=400), max_size=15)


@settings(max_examples=200, deadline=None)
@given(records=_records, cuts=_cuts)
def test_pump_output_is_independent_of_chunk_boundaries(records: list[bytes], cuts: list[int]) -> None:
    # Any chunking of delimiter-terminated input yields the one-pass output.
    data = b"".join(record + b"\n" for record in records)
    sink = _BytesSink()
    Pump(_ListSource(_chunked(data, cuts)), sink).run()
    assert bytes(sink.data) == _one_pass(data)


@settings(max_examples=100, deadline=None)
@given(
    records=_records,
    tail=st.binary(min_size=1, max_size=20).filter(lambda value: b"\n" not in value),
    cuts=_cuts,
)
def test_pump_rejects_unterminated_tail_for_any_chunking(records: list[bytes], tail: bytes, cuts: list[int]) -> None:
    # Trailing bytes without a terminator always fail the run as a data-integrity error.
    data = b"".join(record + b"\n" for record in records) + tail
    with pytest.raises(IncompleteRecordError) as excinfo:
        Pump(_ListSource(_chunked(data, cuts)), _BytesSink()).run()
    assert excinfo.value.residual == len(tail)


@pytest.mark.parametrize("chunk_size", [1, 2, 3, 5, 100])
def test_pump_preserves_order_for_fixed_chunk_sizes(chunk_size: int) -> None:
    data = b"Alpha\nBeta\nGamma\n"
    chunks = [data[i : i + chunk_size] for i in range(0, len(data), chunk_size)]
    sink = _BytesSink()
    Pump(_ListSource(chunks), sink).run()
    assert bytes(sink.data) == b"alpha\nbeta\ngamma\n"
