from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class AdapterMeta:
    # Adapter-level contract: which role it fills and under which config kind it is selected.
    name: str
    role: str
    kind: str


def adapter(*, role: str, kind: str, name: str | None = None) -> Callable[[T], T]:
    # Decorator attaches role/kind metadata to adapter factories for discovery.
    if not role or not kind:
        raise ValueError("adapter role and kind must be non-empty strings")

    def _decorate(target: T) -> T:
        resolved_name = name
        if not isinstance(resolved_name, str) or not resolved_name:
            resolved_name = getattr(target, "__name__", "")
        setattr(target, "__adapter_meta__", AdapterMeta(name=resolved_name, role=role, kind=kind))
        return target

    return _decorate


def get_adapter_meta(target: object) -> AdapterMeta | None:
    # Read adapter contract metadata if present on callable/class target.
    meta = getattr(target, "__adapter_meta__", None)
    if isinstance(meta, AdapterMeta):
        return meta
    return None
