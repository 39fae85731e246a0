"""Domain types for the InkBridge client."""
from __future__ import annotations

from .enums import ErrorKind, HttpMethod, RegistrationState, ResourceKind
from .models import (
    BridgeRequestError,
    Credentials,
    DeviceState,
    Identity,
    Outcome,
    RegistrationResult,
    Response,
)

__all__ = [
    "BridgeRequestError",
    "Credentials",
    "DeviceState",
    "ErrorKind",
    "HttpMethod",
    "Identity",
    "Outcome",
    "RegistrationResult",
    "RegistrationState",
    "ResourceKind",
    "Response",
]
