from __future__ import annotations

import importlib
from typing import Callable

from pipe_stream.adapters.discovery import discover_adapters
from pipe_stream.domain.errors import PipeStreamError


class AdapterRegistryError(PipeStreamError, ValueError):
    # Raised when adapter lookup/build fails.
    pass


class AdapterRegistry:
    # Registry of adapter factories keyed by role + kind.
    def __init__(self) -> None:
        self._factories: dict[tuple[str, str], Callable[[dict[str, object]], object]] = {}

    @classmethod
    def from_modules(cls, module_names: list[str]) -> AdapterRegistry:
        registry = cls()
        modules = [importlib.import_module(name) for name in module_names]
        for (role, kind), factory in discover_adapters(modules).items():
            registry.register(role, kind, factory)
        return registry

    def register(self, role: str, kind: str, factory: Callable[[dict[str, object]], object]) -> None:
        key = (role, kind)
        if key in self._factories:
            raise AdapterRegistryError(f"Duplicate adapter registration: {role}/{kind}")
        self._factories[key] = factory

    def build(self, role: str, config: dict[str, object]) -> object:
        if not isinstance(config, dict):
            raise AdapterRegistryError("Adapter config must be a mapping")
        kind = config.get("kind")
        if not isinstance(kind, str):
            raise AdapterRegistryError("Adapter kind must be a string")
        settings = config.get("settings", {})
        if not isinstance(settings, dict):
            raise AdapterRegistryError("Adapter settings must be a mapping")
        key = (role, kind)
        if key not in self._factories:
            raise AdapterRegistryError(f"Unknown adapter kind for role {role}: {kind}")
        return self._factories[key](settings)

    def kinds(self, role: str) -> list[str]:
        return sorted(kind for (known_role, kind) in self._factories if known_role == role)
