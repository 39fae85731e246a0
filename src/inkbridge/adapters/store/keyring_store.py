from __future__ import annotations

import logging

from inkbridge.config.const import DEFAULT_NAMESPACE, PERSISTED_KEYS

SERVICE_PREFIX = "inkbridge"

_log = logging.getLogger("inkbridge.store.keyring")


class KeyringUnavailableError(RuntimeError):
    """Raised when the system keyring backend is not available."""


def _require_keyring():
    try:
        import keyring  # type: ignore
    except Exception as exc:  # pragma: no cover - import failure path
        raise KeyringUnavailableError("system keyring is unavailable") from exc
    return keyring


class KeyringCredentialStore:
    """Credential records kept in the OS keyring, one entry per record key."""

    def __init__(self, *, namespace: str = DEFAULT_NAMESPACE) -> None:
        self._service = f"{SERVICE_PREFIX}/{namespace}"
        self._init = False
        self._available = False
        self._known: set[str] = set(PERSISTED_KEYS)

    @property
    def service_name(self) -> str:
        return self._service

    def init(self) -> None:
        if self._init:
            return
        try:
            keyring = _require_keyring()
            backend = keyring.get_keyring()
        except KeyringUnavailableError as exc:
            _log.warning("%s", exc)
            self._available = False
        else:
            # the "fail" backend is what keyring picks when nothing usable exists
            self._available = type(backend).__module__ != "keyring.backends.fail"
            if not self._available:
                _log.warning("no usable keyring backend; credentials will not persist")
        self._init = True

    def is_init(self) -> bool:
        return self._init

    def save(self, key: str, value: str) -> None:
        if not self._available:
            return
        keyring = _require_keyring()
        try:
            keyring.set_password(self._service, key, value)
        except Exception as exc:  # backend specific errors
            _log.warning("failed to write %s to keyring: %s", key, exc)
            return
        self._known.add(key)

    def load(self, key: str) -> str | None:
        if not self._available:
            return None
        keyring = _require_keyring()
        try:
            return keyring.get_password(self._service, key)
        except Exception as exc:  # backend specific errors
            _log.warning("failed to read %s from keyring: %s", key, exc)
            return None

    def factory_reset(self) -> None:
        if not self._available:
            return
        keyring = _require_keyring()
        for key in sorted(self._known):
            try:
                keyring.delete_password(self._service, key)
            except keyring.errors.PasswordDeleteError:
                continue
            except Exception as exc:  # backend specific errors
                _log.warning("failed to delete %s from keyring: %s", key, exc)
