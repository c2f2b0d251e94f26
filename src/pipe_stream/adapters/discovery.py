from __future__ import annotations

from types import ModuleType
from typing import Callable

from pipe_stream.adapters.contracts import get_adapter_meta
from pipe_stream.domain.errors import PipeStreamError


class AdapterDiscoveryError(PipeStreamError, RuntimeError):
    # Raised when adapter discovery finds duplicate role/kind pairs or invalid targets.
    pass


def discover_adapters(
    modules: list[ModuleType],
) -> dict[tuple[str, str], Callable[[dict[str, object]], object]]:
    # Discover adapter factories declared via @adapter(role=..., kind=...).
    discovered: dict[tuple[str, str], Callable[[dict[str, object]], object]] = {}
    for module in modules:
        for value in module.__dict__.values():
            meta = get_adapter_meta(value)
            if meta is None:
                continue
            if not callable(value):
                raise AdapterDiscoveryError(f"Adapter '{meta.name}' target is not callable")
            key = (meta.role, meta.kind)
            if key in discovered:
                if discovered[key] is value:
                    # Same callable re-exported through another module is not a conflict.
                    continue
                raise AdapterDiscoveryError(f"Duplicate adapter discovered: {meta.role}/{meta.kind}")
            discovered[key] = value
    return discovered
