"""Value objects shared by the bridge core and its accessors."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from inkbridge.config.const import DEFAULT_API_BASE_URL, DEFAULT_FRIENDLY_NAME

from .enums import ErrorKind, RegistrationState

__all__ = [
    "BridgeRequestError",
    "Credentials",
    "DeviceState",
    "Identity",
    "Outcome",
    "RegistrationResult",
    "Response",
]


class BridgeRequestError(RuntimeError):
    """Raised by :meth:`Response.raise_for_outcome` for callers that prefer exceptions."""

    def __init__(self, message: str, *, kind: ErrorKind, code: int | None = None, payload: Any | None = None):
        super().__init__(message)
        self.kind = kind
        self.code = code
        self.payload = payload


@dataclass(frozen=True, slots=True)
class Outcome:
    """Classified result of a transport call. ``kind`` is ``None`` for success."""

    kind: ErrorKind | None = None
    code: int | None = None

    @classmethod
    def ok(cls, code: int | None = None) -> "Outcome":
        return cls(kind=None, code=code)

    @classmethod
    def http_error(cls, code: int) -> "Outcome":
        return cls(kind=ErrorKind.HTTP_ERROR, code=code)

    @classmethod
    def failure(cls, kind: ErrorKind) -> "Outcome":
        return cls(kind=kind)

    @property
    def is_ok(self) -> bool:
        return self.kind is None

    @property
    def label(self) -> str:
        if self.kind is None:
            return "OK"
        if self.kind is ErrorKind.HTTP_ERROR:
            return f"HTTP_ERROR_{self.code}"
        return self.kind.value

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True, slots=True)
class Response:
    """Uniform envelope returned by every transport call and held by the cache."""

    outcome: Outcome
    data: Any | None = None

    @property
    def ok(self) -> bool:
        return self.outcome.is_ok

    @property
    def status(self) -> str:
        return self.outcome.label

    def raise_for_outcome(self) -> "Response":
        if self.outcome.is_ok:
            return self
        kind = self.outcome.kind
        assert kind is not None
        raise BridgeRequestError(self.status, kind=kind, code=self.outcome.code, payload=self.data)


@dataclass(frozen=True, slots=True)
class Identity:
    device_id: str
    uid: str
    friendly_name: str


@dataclass(frozen=True, slots=True)
class Credentials:
    api_key: str
    api_base_url: str


@dataclass(slots=True)
class DeviceState:
    """Mutable in-memory identity and credentials owned by the bridge."""

    device_id: str = ""
    uid: str = ""
    api_key: str = ""
    api_base_url: str = DEFAULT_API_BASE_URL
    friendly_name: str = DEFAULT_FRIENDLY_NAME

    @property
    def registration_state(self) -> RegistrationState:
        if self.api_key and self.device_id and self.uid:
            return RegistrationState.REGISTERED
        return RegistrationState.UNREGISTERED

    def identity(self) -> Identity:
        return Identity(device_id=self.device_id, uid=self.uid, friendly_name=self.friendly_name)

    def credentials(self) -> Credentials:
        return Credentials(api_key=self.api_key, api_base_url=self.api_base_url)


@dataclass(frozen=True, slots=True)
class RegistrationResult:
    ok: bool
    api_key: str = ""
    friendly_name: str = ""
    uid: str = ""
    error: ErrorKind | None = None
    reason: str = ""

    @classmethod
    def failed(cls, error: ErrorKind, reason: str = "") -> "RegistrationResult":
        return cls(ok=False, error=error, reason=reason)
