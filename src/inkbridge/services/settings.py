from __future__ import annotations
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any
import os
import yaml

from inkbridge.config.const import (
    CONNECT_TIMEOUT_S,
    DEFAULT_API_BASE_URL,
    DEFAULT_NAMESPACE,
    MAX_ATTEMPTS,
    REQUEST_TIMEOUT_S,
    RETRY_DELAY_S,
)
from inkbridge.ports import CredentialStore

SETTINGS_FILENAME = "inkbridge.yaml"
STORE_BACKENDS = ("file", "keyring", "memory")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def base_dir() -> Path:
    raw = os.environ.get("INKBRIDGE_BASE_DIR")
    if raw:
        return Path(raw).expanduser()
    return Path.home() / ".inkbridge"


def _config_path(root: Path | None = None) -> Path:
    p = (root or base_dir()) / SETTINGS_FILENAME
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


@dataclass
class BridgeSettings:
    api_base_url: str = DEFAULT_API_BASE_URL
    # certificate validation is off on the device; keep it switchable
    verify_tls: bool = False
    connect_timeout: float = CONNECT_TIMEOUT_S
    timeout: float = REQUEST_TIMEOUT_S
    max_attempts: int = MAX_ATTEMPTS
    retry_delay: float = RETRY_DELAY_S
    namespace: str = DEFAULT_NAMESPACE
    store: str = "file"
    credentials_file: str = "credentials.yaml"
    refetch_failed: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    def validate(self) -> "BridgeSettings":
        self.store = (self.store or "file").strip().lower()
        if self.store not in STORE_BACKENDS:
            raise ValueError(f"store must be one of {', '.join(STORE_BACKENDS)}")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.timeout <= 0 or self.connect_timeout <= 0:
            raise ValueError("timeouts must be positive")
        if self.retry_delay < 0:
            raise ValueError("retry_delay must not be negative")
        if not self.namespace:
            raise ValueError("namespace must not be empty")
        return self

    def credentials_path(self, root: Path | None = None) -> Path:
        candidate = Path(self.credentials_file).expanduser()
        if candidate.is_absolute():
            return candidate
        return (root or base_dir()) / candidate

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _settings_from_dict(payload: Any) -> BridgeSettings:
    payload = payload if isinstance(payload, dict) else {}
    defaults = BridgeSettings()
    values: dict[str, Any] = {}
    for f in fields(BridgeSettings):
        raw = payload.get(f.name)
        default = getattr(defaults, f.name)
        if raw is None or raw == "":
            values[f.name] = default
        elif isinstance(default, bool):
            values[f.name] = _coerce_bool(raw, default)
        elif isinstance(default, int):
            values[f.name] = int(raw)
        elif isinstance(default, float):
            values[f.name] = float(raw)
        else:
            values[f.name] = str(raw)
    return BridgeSettings(**values)


def _apply_env(settings: BridgeSettings) -> BridgeSettings:
    url = os.environ.get("INKBRIDGE_API_URL")
    if url:
        settings.api_base_url = url
    store = os.environ.get("INKBRIDGE_STORE")
    if store:
        settings.store = store
    level = os.environ.get("INKBRIDGE_LOG_LEVEL")
    if level:
        settings.log_level = level
    verify = os.environ.get("INKBRIDGE_VERIFY_TLS")
    if verify:
        settings.verify_tls = _coerce_bool(verify, settings.verify_tls)
    return settings


def load_settings(root: Path | None = None) -> BridgeSettings:
    path = _config_path(root)
    if not path.exists():
        settings = BridgeSettings()
        save_settings(settings, root=root)
        return _apply_env(settings).validate()
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    settings = _settings_from_dict(data)
    return _apply_env(settings).validate()


def save_settings(settings: BridgeSettings, *, root: Path | None = None) -> None:
    _config_path(root).write_text(
        yaml.safe_dump(settings.to_dict(), allow_unicode=True, sort_keys=False),
        encoding="utf-8",
    )


def build_store(settings: BridgeSettings, *, root: Path | None = None) -> CredentialStore:
    from inkbridge.adapters.store import FileCredentialStore, KeyringCredentialStore, MemoryCredentialStore

    if settings.store == "keyring":
        return KeyringCredentialStore(namespace=settings.namespace)
    if settings.store == "memory":
        return MemoryCredentialStore()
    return FileCredentialStore(settings.credentials_path(root), namespace=settings.namespace)


__all__ = [
    "BridgeSettings",
    "base_dir",
    "build_store",
    "load_settings",
    "save_settings",
]
