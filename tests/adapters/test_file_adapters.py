from __future__ import annotations

from pathlib import Path

import pytest

from pipe_stream.adapters.file_io import file_sink, file_source
from pipe_stream.domain.signals import StopReason
from pipe_stream.kernel.pump import Pump
from pipe_stream.kernel.transforming_stream import TransformingStream


def test_file_source_reads_in_chunks(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_bytes(b"abcdef")
    source = file_source({"path": str(path), "chunk_size": 4})
    assert source.read().chunk == b"abcd"
    assert source.read().chunk == b"ef"
    assert source.read().is_end
    source.close()


def test_file_source_missing_file_raises(tmp_path: Path) -> None:
    # Missing input fails fast at construction.
    with pytest.raises(FileNotFoundError):
        file_source({"path": str(tmp_path / "missing.txt")})


def test_file_source_requires_path() -> None:
    with pytest.raises(ValueError, match="source.settings.path"):
        file_source({})


def test_file_source_rejects_bad_chunk_size(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_bytes(b"")
    with pytest.raises(ValueError, match="chunk_size"):
        file_source({"path": str(path), "chunk_size": "big"})


def test_file_sink_wraps_file_in_case_folding_stream(tmp_path: Path) -> None:
    path = tmp_path / "out.txt"
    sink = file_sink({"path": str(path)})
    assert isinstance(sink.stream, TransformingStream)
    sink.write(b"ShOuT\n")
    sink.close()
    assert path.read_bytes() == b"shout\n"


def test_file_sink_without_folding_writes_raw_bytes(tmp_path: Path) -> None:
    path = tmp_path / "out.txt"
    sink = file_sink({"path": str(path), "fold_case": False})
    sink.write(b"ShOuT\n")
    sink.close()
    assert path.read_bytes() == b"ShOuT\n"


def test_file_sink_atomic_replace_commits_on_close(tmp_path: Path) -> None:
    # Atomic mode writes to a temp file and moves it into place on close.
    path = tmp_path / "out.txt"
    sink = file_sink({"path": str(path), "atomic_replace": True})
    sink.write(b"x\n")
    assert not path.exists()
    assert (tmp_path / "out.txt.tmp").exists()
    sink.close()
    assert path.read_bytes() == b"x\n"
    assert not (tmp_path / "out.txt.tmp").exists()


def test_file_to_file_pump_with_capacity(tmp_path: Path) -> None:
    # Capacity limit on the file sink stops the pump early.
    src = tmp_path / "in.txt"
    src.write_bytes(b"A\nB\nC\nD\n")
    dst = tmp_path / "out.txt"
    source = file_source({"path": str(src), "chunk_size": 2})
    sink = file_sink({"path": str(dst), "capacity_bytes": 4})
    report = Pump(source, sink).run()
    assert report.stop is StopReason.SINK_AT_CAPACITY
    assert dst.read_bytes() == b"a\nb\n"
    assert source.stream.closed
