"""Process-local credential store used by tests and ephemeral devices."""
from __future__ import annotations

import logging
from typing import Dict

_log = logging.getLogger("inkbridge.store.memory")


class MemoryCredentialStore:
    def __init__(self, initial: Dict[str, str] | None = None, *, available: bool = True) -> None:
        self._records: Dict[str, str] = dict(initial or {})
        self._available = available
        self._init = False
        self.writes: list[tuple[str, str]] = []

    def init(self) -> None:
        self._init = True

    def is_init(self) -> bool:
        return self._init

    def save(self, key: str, value: str) -> None:
        if not self._available:
            _log.warning("store unavailable; skipping write", extra={"key": key})
            return
        self._records[key] = value
        self.writes.append((key, value))

    def load(self, key: str) -> str | None:
        if not self._available:
            return None
        return self._records.get(key)

    def factory_reset(self) -> None:
        if not self._available:
            _log.warning("store unavailable; skipping reset")
            return
        self._records.clear()
        self._init = True

    def snapshot(self) -> Dict[str, str]:
        return dict(self._records)
