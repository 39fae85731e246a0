"""Network readiness and hardware address taken from the host interfaces."""
from __future__ import annotations

import logging
import socket
from typing import Iterable

import psutil

_log = logging.getLogger("inkbridge.network")

_NULL_MAC = "00:00:00:00:00:00"


class PsutilNetworkProbe:
    """Treats the device as online when a non-loopback interface is up with an IPv4 address.

    The hardware address reported is the link-layer address of that same
    interface, so the identity follows the interface that carries traffic.
    ``interface`` pins the lookup to one NIC.
    """

    def __init__(self, interface: str | None = None) -> None:
        self._interface = interface

    def _candidates(self) -> Iterable[tuple[str, list]]:
        addrs = psutil.net_if_addrs()
        stats = psutil.net_if_stats()
        names = [self._interface] if self._interface else sorted(addrs)
        for name in names:
            if name not in addrs:
                continue
            st = stats.get(name)
            if st is None or not st.isup:
                continue
            entries = addrs[name]
            if any(a.family == socket.AF_INET and a.address.startswith("127.") for a in entries):
                continue
            if not any(a.family == socket.AF_INET for a in entries):
                continue
            yield name, entries

    def is_connected(self) -> bool:
        try:
            return any(True for _ in self._candidates())
        except OSError as exc:
            _log.warning("interface enumeration failed: %s", exc)
            return False

    def hardware_address(self) -> str | None:
        try:
            for name, entries in self._candidates():
                for entry in entries:
                    if entry.family != psutil.AF_LINK:
                        continue
                    mac = (entry.address or "").replace("-", ":").upper()
                    if mac and mac != _NULL_MAC:
                        _log.debug("hardware address from %s", name)
                        return mac
        except OSError as exc:
            _log.warning("interface enumeration failed: %s", exc)
        return None
