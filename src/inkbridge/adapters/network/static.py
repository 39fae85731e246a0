from __future__ import annotations

from dataclasses import dataclass


@dataclass
class StaticNetworkProbe:
    """Fixed connectivity and hardware address, for tests and pinned deployments."""

    connected: bool = True
    address: str | None = None

    def is_connected(self) -> bool:
        return self.connected

    def hardware_address(self) -> str | None:
        return self.address if self.connected else None
