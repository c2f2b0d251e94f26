from __future__ import annotations


class UnconsumedBuffer:
    # Append/consume sliding window over a single growable arena.
    #
    # _start is the consumed-offset index: bytes before it were handed out as records
    # and are dropped physically only on release(). _scanned marks how far the arena
    # has been searched without finding a delimiter, so a long partial record is not
    # rescanned on every append. The hint is only valid for the delimiter that set it.

    def __init__(self) -> None:
        self._data = bytearray()
        self._start = 0
        self._scanned = 0
        self._scanned_for: bytes | None = None
        self._released_total = 0

    def __len__(self) -> int:
        return len(self._data) - self._start

    def __bool__(self) -> bool:
        return len(self) > 0

    @property
    def consumed(self) -> int:
        # Bytes advanced past but not yet released.
        return self._start

    @property
    def released_total(self) -> int:
        return self._released_total

    def append(self, chunk: bytes | bytearray | memoryview) -> None:
        if chunk:
            self._data += chunk

    def find(self, delimiter: bytes) -> int:
        """Return the delimiter offset relative to the unconsumed front, or -1."""
        if delimiter != self._scanned_for:
            self._scanned = self._start
            self._scanned_for = delimiter
        begin = max(self._start, self._scanned)
        position = self._data.find(delimiter, begin)
        if position < 0:
            self._scanned = len(self._data)
            return -1
        return position - self._start

    def take(self, size: int) -> bytes:
        """Copy out ``size`` bytes from the front and advance past them."""
        if size < 0 or size > len(self):
            raise ValueError(f"Cannot take {size} byte(s) from a buffer holding {len(self)}")
        chunk = bytes(self._data[self._start : self._start + size])
        self._start += size
        return chunk

    def advance(self, size: int) -> None:
        if size < 0 or size > len(self):
            raise ValueError(f"Cannot advance {size} byte(s) in a buffer holding {len(self)}")
        self._start += size

    def release(self) -> int:
        """Drop the consumed prefix from the arena and return how many bytes were released."""
        released = self._start
        if released:
            del self._data[:released]
            self._scanned = max(0, self._scanned - released)
            self._start = 0
            self._released_total += released
        return released

    def snapshot(self) -> bytes:
        # Copy of the unconsumed bytes; for diagnostics and tests.
        return bytes(self._data[self._start :])
