"""Logging setup shared by the CLI and embedding applications."""

from __future__ import annotations

import json
import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

__all__ = ["setup_logging", "JsonFormatter", "redact_url", "mask_secret"]

_RESERVED = set(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}
_API_KEY_PARAM = re.compile(r"(api_key=)[^&]*")


def mask_secret(value: str | None) -> str:
    if not value:
        return "-"
    if len(value) <= 8:
        return "*" * len(value)
    return value[:2] + "*" * (len(value) - 6) + value[-4:]


def redact_url(url: str) -> str:
    return _API_KEY_PARAM.sub(r"\1***", url)


def _json_payload(record: logging.LogRecord) -> str:
    base = {
        "level": record.levelname,
        "logger": record.name,
        "msg": record.getMessage(),
    }
    timestamp = getattr(record, "asctime", None)
    if timestamp:
        base["time"] = timestamp
    for key, value in record.__dict__.items():
        if key not in _RESERVED and not key.startswith("_"):
            base[key] = value
    return json.dumps(base, ensure_ascii=False, default=str)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, ``extra=`` fields merged at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        return _json_payload(record)


def setup_logging(
    level: Optional[str] = None,
    *,
    json_output: bool = False,
    logfile: Path | None = None,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
) -> logging.Logger:
    logger = logging.getLogger("inkbridge")
    numeric_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.propagate = False

    console = logging.StreamHandler()
    console.setLevel(numeric_level)
    if json_output:
        console.setFormatter(JsonFormatter())
    else:
        console.setFormatter(logging.Formatter("[%(name)s] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if logfile is not None:
        logfile.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(logfile, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        handler.setLevel(numeric_level)
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)

    return logger
