"""One-time device registration against the backend ``/setup`` resource."""
from __future__ import annotations

import logging
from typing import Any, Mapping

from inkbridge.config.const import KEY_API_KEY, KEY_FRIENDLY_USER, KEY_UID, SETUP_ENDPOINT
from inkbridge.domain import ErrorKind, HttpMethod, RegistrationResult
from inkbridge.ports import CredentialStore

from .transport import Transport

__all__ = ["RegistrationFlow"]

_log = logging.getLogger("inkbridge.registration")


def _text(doc: Mapping[str, Any], key: str) -> str:
    value = doc.get(key)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class RegistrationFlow:
    def __init__(self, transport: Transport, store: CredentialStore) -> None:
        self._transport = transport
        self._store = store

    def register(self, device_id: str) -> RegistrationResult:
        if not device_id:
            return RegistrationResult.failed(ErrorKind.IDENTITY_UNAVAILABLE, "device id is empty")

        response = self._transport.send(SETUP_ENDPOINT, HttpMethod.GET)
        if not response.ok:
            _log.error("registration request failed: %s; check API connection", response.status)
            return RegistrationResult.failed(ErrorKind.REGISTRATION_FAILED, response.status)

        doc = response.data if isinstance(response.data, Mapping) else {}
        if doc.get("status") != "success":
            reason = _text(doc, "message")
            _log.error("registration rejected: %s", reason)
            return RegistrationResult.failed(ErrorKind.REGISTRATION_REJECTED, reason)

        result = RegistrationResult(
            ok=True,
            api_key=_text(doc, "api_key"),
            friendly_name=_text(doc, "friendly_user_id"),
            uid=_text(doc, "uid"),
        )
        self._store.save(KEY_API_KEY, result.api_key)
        self._store.save(KEY_FRIENDLY_USER, result.friendly_name)
        self._store.save(KEY_UID, result.uid)
        _log.info("registration successful, linked to %s", result.friendly_name)
        return result
