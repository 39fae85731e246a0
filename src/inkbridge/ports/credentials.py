from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CredentialStore(Protocol):
    """Durable string records under a single namespace.

    ``load`` returns ``None`` for a record that was never written, which is
    distinct from an empty string. Implementations never raise on storage
    failures: writes are skipped and reads report absent.
    """

    def init(self) -> None: ...

    def is_init(self) -> bool: ...

    def save(self, key: str, value: str) -> None: ...

    def load(self, key: str) -> str | None: ...

    def factory_reset(self) -> None: ...
