"""Derivation and persistence of the device identifier."""
from __future__ import annotations

import logging
import re

from inkbridge.config.const import KEY_DEVICE_ID, NULL_LITERAL
from inkbridge.domain import ErrorKind
from inkbridge.ports import CredentialStore, NetworkProbe

__all__ = ["IdentityResolver", "normalize_hardware_address", "is_absent"]

_log = logging.getLogger("inkbridge.identity")

_SEPARATORS = re.compile(r"[:\-.\s]")


def normalize_hardware_address(address: str) -> str:
    """``AA:BB:CC:11:22:33`` -> ``AABBCC112233``."""
    return _SEPARATORS.sub("", address).upper()


def is_absent(value: str | None) -> bool:
    return value is None or value == "" or value == NULL_LITERAL


class IdentityResolver:
    def __init__(self, store: CredentialStore, probe: NetworkProbe) -> None:
        self._store = store
        self._probe = probe

    def is_network_ready(self) -> bool:
        return self._probe.is_connected()

    def resolve_device_id(self, stored: str | None) -> tuple[str, ErrorKind | None]:
        if not is_absent(stored):
            assert stored is not None
            _log.info("loaded device id from storage: %s", stored)
            return stored, None

        if not self._probe.is_connected():
            _log.error("network needed to generate device id")
            return "", ErrorKind.NETWORK_REQUIRED

        address = self._probe.hardware_address()
        device_id = normalize_hardware_address(address or "")
        if not device_id:
            _log.error("network is up but no hardware address is available")
            return "", ErrorKind.IDENTITY_UNAVAILABLE

        _log.info("new device id detected: %s", device_id)
        self._store.save(KEY_DEVICE_ID, device_id)
        return device_id, None
