from __future__ import annotations

import pytest

from pipe_stream.kernel.buffer import UnconsumedBuffer


def test_buffer_find_is_relative_to_unconsumed_front() -> None:
    buffer = UnconsumedBuffer()
    buffer.append(b"ab\ncd\n")
    assert buffer.find(b"\n") == 2
    buffer.advance(3)
    assert buffer.find(b"\n") == 2
    assert len(buffer) == 3


def test_buffer_take_copies_and_advances() -> None:
    buffer = UnconsumedBuffer()
    buffer.append(b"hello")
    assert buffer.take(2) == b"he"
    assert buffer.consumed == 2
    assert buffer.snapshot() == b"llo"


def test_buffer_release_drops_exactly_the_consumed_prefix() -> None:
    # Released bytes equal the consumed prefix; the unconsumed tail is kept intact.
    buffer = UnconsumedBuffer()
    buffer.append(b"one\ntw")
    buffer.advance(4)
    assert buffer.release() == 4
    assert buffer.consumed == 0
    assert buffer.released_total == 4
    assert buffer.snapshot() == b"tw"
    assert buffer.release() == 0


def test_buffer_find_resumes_after_scanned_partial_record() -> None:
    # A miss remembers how far it searched; appending more data still finds the delimiter.
    buffer = UnconsumedBuffer()
    buffer.append(b"partial")
    assert buffer.find(b"\n") == -1
    buffer.append(b" record\nnext")
    assert buffer.find(b"\n") == len(b"partial record")


def test_buffer_scan_position_survives_release() -> None:
    buffer = UnconsumedBuffer()
    buffer.append(b"a\nbbbb")
    buffer.advance(buffer.find(b"\n") + 1)
    assert buffer.find(b"\n") == -1
    buffer.release()
    buffer.append(b"\n")
    assert buffer.find(b"\n") == 4


def test_buffer_rejects_out_of_range_take_and_advance() -> None:
    buffer = UnconsumedBuffer()
    buffer.append(b"ab")
    with pytest.raises(ValueError):
        buffer.take(3)
    with pytest.raises(ValueError):
        buffer.advance(-1)


def test_buffer_ignores_empty_appends_and_reports_truthiness() -> None:
    buffer = UnconsumedBuffer()
    buffer.append(b"")
    assert not buffer
    buffer.append(bytearray(b"x"))
    assert buffer


def test_buffer_scan_hint_does_not_carry_over_to_another_delimiter() -> None:
    # A miss on one delimiter must not hide earlier bytes from a search for another.
    buffer = UnconsumedBuffer()
    buffer.append(b"x;y")
    assert buffer.find(b"\n") == -1
    assert buffer.find(b";") == 1
    assert buffer.find(b"\n") == -1
