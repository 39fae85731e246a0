# src/inkbridge/config/const.py
from __future__ import annotations

# Defaults mirrored from the device firmware; overridable through BridgeSettings.
DEFAULT_API_BASE_URL: str = "https://us-central1-inkbase01.cloudfunctions.net/api"
DEFAULT_FRIENDLY_NAME: str = "Unknown"
DEFAULT_NAMESPACE: str = "dev_conf"

CONNECT_TIMEOUT_S: float = 10.0
REQUEST_TIMEOUT_S: float = 15.0
MAX_ATTEMPTS: int = 3
RETRY_DELAY_S: float = 1.0

SETUP_ENDPOINT: str = "/setup"

# Persisted record names (flash layout of the firmware, keep verbatim).
KEY_DEVICE_ID: str = "deviceId"
KEY_UID: str = "uid"
KEY_API_KEY: str = "apikey"
KEY_API_URL: str = "apiurl"
KEY_FRIENDLY_USER: str = "friendlyuser"

PERSISTED_KEYS: tuple[str, ...] = (
    KEY_DEVICE_ID,
    KEY_UID,
    KEY_API_KEY,
    KEY_API_URL,
    KEY_FRIENDLY_USER,
)

# Written by older firmware when a JSON value was missing.
NULL_LITERAL: str = "null"
