"""YAML file backed credential store.

Every operation opens the file, reads or rewrites the namespace and closes it
again; nothing is held between calls. Writes go through a sibling temp file
and ``os.replace`` so an interrupted write leaves the previous document
intact.
"""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

import yaml

from inkbridge.config.const import DEFAULT_NAMESPACE

_log = logging.getLogger("inkbridge.store.file")


class FileCredentialStore:
    def __init__(self, path: Path, *, namespace: str = DEFAULT_NAMESPACE) -> None:
        self._path = Path(path)
        self._namespace = namespace
        self._init = False

    @property
    def path(self) -> Path:
        return self._path

    def init(self) -> None:
        if self._init:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            document = self._read_document()
            if document is None:
                # unreadable document: start over, mirroring an erase-and-reinit of flash
                _log.warning("credential file unreadable; reinitialising", extra={"path": str(self._path)})
                self._write_document({self._namespace: {}})
            elif not self._path.exists():
                self._write_document({self._namespace: {}})
        except OSError as exc:
            _log.warning("credential file unavailable: %s", exc, extra={"path": str(self._path)})
            return
        self._init = True

    def is_init(self) -> bool:
        return self._init

    def _read_document(self) -> Dict[str, Any] | None:
        if not self._path.exists():
            return {}
        try:
            data = yaml.safe_load(self._path.read_text(encoding="utf-8")) or {}
        except (yaml.YAMLError, UnicodeDecodeError):
            return None
        if not isinstance(data, dict):
            return None
        return data

    def _write_document(self, document: Dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".creds-", dir=str(self._path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                yaml.safe_dump(document, fh, allow_unicode=True, sort_keys=False)
                fh.flush()
                os.fsync(fh.fileno())
            try:
                os.chmod(tmp_name, 0o600)
            except PermissionError:
                pass
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _bucket(self, document: Dict[str, Any]) -> Dict[str, Any]:
        bucket = document.get(self._namespace)
        return bucket if isinstance(bucket, dict) else {}

    def save(self, key: str, value: str) -> None:
        try:
            document = self._read_document()
            if document is None:
                _log.warning("credential file unreadable; skipping write", extra={"key": key})
                return
            bucket = self._bucket(document)
            bucket[key] = str(value)
            document[self._namespace] = bucket
            self._write_document(document)
        except OSError as exc:
            _log.warning("failed to persist %s: %s", key, exc)

    def load(self, key: str) -> str | None:
        try:
            document = self._read_document()
        except OSError as exc:
            _log.warning("failed to read %s: %s", key, exc)
            return None
        if document is None:
            return None
        value = self._bucket(document).get(key)
        if value is None:
            return None
        return str(value)

    def factory_reset(self) -> None:
        try:
            document = self._read_document() or {}
            document[self._namespace] = {}
            self._write_document(document)
        except OSError as exc:
            _log.warning("factory reset failed: %s", exc, extra={"path": str(self._path)})
            return
        self._init = True
