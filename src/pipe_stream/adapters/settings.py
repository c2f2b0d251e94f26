from __future__ import annotations

from pathlib import Path


def require_str(settings: dict[str, object], key: str, role: str) -> str:
    value = settings.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f"{role}.settings.{key} must be a non-empty string")
    return value


def require_path(settings: dict[str, object], key: str, role: str) -> Path:
    return Path(require_str(settings, key, role))


def optional_int(settings: dict[str, object], key: str, role: str, default: int | None) -> int | None:
    value = settings.get(key, default)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{role}.settings.{key} must be a positive integer")
    return value


def optional_float(settings: dict[str, object], key: str, role: str, default: float) -> float:
    value = settings.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ValueError(f"{role}.settings.{key} must be a positive number")
    return float(value)
