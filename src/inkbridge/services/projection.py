"""Pure readers over decoded JSON. None of them raise on a missing path."""
from __future__ import annotations

from typing import Any, Mapping, Sequence

__all__ = ["by_key", "by_index", "dig", "find_by", "size", "as_str", "as_float", "as_int", "as_bool"]


def by_key(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key)
    return None


def by_index(value: Any, index: int) -> Any:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        if 0 <= index < len(value):
            return value[index]
    return None


def dig(value: Any, *path: str | int) -> Any:
    for step in path:
        if value is None:
            return None
        value = by_index(value, step) if isinstance(step, int) else by_key(value, step)
    return value


def find_by(items: Any, key: str, expected: str) -> Any:
    if not isinstance(items, Sequence) or isinstance(items, (str, bytes)):
        return None
    for item in items:
        if as_str(by_key(item, key)) == expected:
            return item
    return None


def size(value: Any) -> int:
    if isinstance(value, (Mapping, list, tuple)):
        return len(value)
    return 0


def as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def as_float(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def as_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(float(value))
        except ValueError:
            return 0
    return 0


def as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False
