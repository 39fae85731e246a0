from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class NetworkProbe(Protocol):
    def is_connected(self) -> bool: ...

    def hardware_address(self) -> str | None: ...
