from __future__ import annotations

import string

# Byte-wise ASCII case folding: only A-Z change, every other byte value passes through.
_FOLD_TABLE = bytes.maketrans(string.ascii_uppercase.encode("ascii"), string.ascii_lowercase.encode("ascii"))


def fold_case(chunk: bytes | bytearray | memoryview) -> bytes:
    # Memoryless and length-preserving, so any split of the input folds identically.
    return bytes(chunk).translate(_FOLD_TABLE)
