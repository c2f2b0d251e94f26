from __future__ import annotations

import io
from collections.abc import Callable
from types import TracebackType
from typing import BinaryIO

from pipe_stream.domain.case_fold import fold_case

Transform = Callable[[bytes], bytes]


class TransformingStream:
    """Binary stream decorator that transforms every chunk passing through it.

    Wraps any object with ``read``/``write``/``seek``/``close`` and applies a
    stateless, length-preserving ``transform`` to chunks written to the inner
    stream and to chunks read back from it. Nothing is buffered between calls,
    so chunk boundaries and order are exactly those chosen by the caller.

    Everything else (seek, tell, flush, truncate, length) is forwarded as-is.
    Closing flushes and then closes the inner stream exactly once.
    """

    def __init__(
        self,
        inner: BinaryIO,
        transform: Transform = fold_case,
        *,
        on_read: bool = True,
        on_write: bool = True,
    ) -> None:
        self._inner = inner
        self._transform = transform
        self._on_read = on_read
        self._on_write = on_write
        self._closed = False

    @property
    def inner(self) -> BinaryIO:
        return self._inner

    @property
    def closed(self) -> bool:
        return self._closed

    def readable(self) -> bool:
        return self._inner.readable()

    def writable(self) -> bool:
        return self._inner.writable()

    def seekable(self) -> bool:
        return self._inner.seekable()

    def read(self, size: int = -1) -> bytes:
        self._check_open()
        chunk = self._inner.read(size)
        if not chunk or not self._on_read:
            return chunk
        return self._apply(chunk)

    def read1(self, size: int = -1) -> bytes:
        self._check_open()
        read1 = getattr(self._inner, "read1", None)
        chunk = read1(size) if callable(read1) else self._inner.read(size)
        if not chunk or not self._on_read:
            return chunk
        return self._apply(chunk)

    def readinto(self, target: bytearray | memoryview) -> int:
        self._check_open()
        view = memoryview(target).cast("B")
        count = self._inner.readinto(view)
        if count and self._on_read:
            view[:count] = self._apply(bytes(view[:count]))
        return count

    def write(self, chunk: bytes | bytearray | memoryview) -> int:
        self._check_open()
        data = bytes(chunk)
        if self._on_write:
            data = self._apply(data)
        return self._inner.write(data)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        self._check_open()
        return self._inner.seek(offset, whence)

    def tell(self) -> int:
        self._check_open()
        return self._inner.tell()

    @property
    def position(self) -> int:
        return self.tell()

    @position.setter
    def position(self, value: int) -> None:
        self.seek(value, io.SEEK_SET)

    @property
    def length(self) -> int:
        # Size of the inner target; the current position is restored afterwards.
        self._check_open()
        current = self._inner.tell()
        end = self._inner.seek(0, io.SEEK_END)
        self._inner.seek(current, io.SEEK_SET)
        return end

    def truncate(self, size: int | None = None) -> int:
        self._check_open()
        return self._inner.truncate(size)

    def fileno(self) -> int:
        return self._inner.fileno()

    def flush(self) -> None:
        self._check_open()
        self._inner.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            if not getattr(self._inner, "closed", False):
                self._inner.flush()
        finally:
            self._inner.close()

    def __enter__(self) -> TransformingStream:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _apply(self, chunk: bytes) -> bytes:
        transformed = self._transform(chunk)
        if len(transformed) != len(chunk):
            raise ValueError("Stream transform must preserve chunk length")
        return transformed

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed stream")
