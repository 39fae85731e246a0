"""InkBridge device client."""
from __future__ import annotations

from inkbridge.domain import (
    BridgeRequestError,
    ErrorKind,
    HttpMethod,
    Outcome,
    RegistrationState,
    ResourceKind,
    Response,
)
from inkbridge.services.bridge import InkBridge
from inkbridge.services.settings import BridgeSettings, load_settings

__version__ = "0.1.0"

__all__ = [
    "BridgeRequestError",
    "BridgeSettings",
    "ErrorKind",
    "HttpMethod",
    "InkBridge",
    "Outcome",
    "RegistrationState",
    "ResourceKind",
    "Response",
    "load_settings",
]
