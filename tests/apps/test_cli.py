from __future__ import annotations

import logging

import pytest
import yaml
from typer.testing import CliRunner

from inkbridge.apps.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(monkeypatch):
    for name in ("INKBRIDGE_API_URL", "INKBRIDGE_STORE", "INKBRIDGE_LOG_LEVEL", "INKBRIDGE_VERIFY_TLS", "INKBRIDGE_BASE_DIR"):
        monkeypatch.delenv(name, raising=False)
    yield
    logger = logging.getLogger("inkbridge")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = True


def _invoke(tmp_path, *args, **kwargs):
    return runner.invoke(app, ["--base-dir", str(tmp_path), *args], **kwargs)


def _records(tmp_path):
    return yaml.safe_load((tmp_path / "credentials.yaml").read_text(encoding="utf-8"))["dev_conf"]


def test_status_on_fresh_install(tmp_path):
    result = _invoke(tmp_path, "status")

    assert result.exit_code == 0, result.output
    assert "device id:     -" in result.output
    assert "friendly name: Unknown" in result.output
    assert "state:         unregistered" in result.output
    assert (tmp_path / "inkbridge.yaml").exists()


def test_set_api_key_then_status_masks_it(tmp_path):
    result = _invoke(tmp_path, "set-api-key", "abcdefghijkl")
    assert result.exit_code == 0, result.output
    assert _records(tmp_path)["apikey"] == "abcdefghijkl"

    status = _invoke(tmp_path, "status")
    assert "ab******ijkl" in status.output
    assert "abcdefghijkl" not in status.output


def test_set_api_url_is_persisted(tmp_path):
    result = _invoke(tmp_path, "set-api-url", "https://staging.test/api")

    assert result.exit_code == 0, result.output
    assert _records(tmp_path)["apiurl"] == "https://staging.test/api"
    assert "api url:       https://staging.test/api" in _invoke(tmp_path, "status").output


def test_reset_requires_confirmation(tmp_path):
    _invoke(tmp_path, "set-api-key", "k1")

    declined = _invoke(tmp_path, "reset", input="n\n")
    assert declined.exit_code != 0
    assert _records(tmp_path)["apikey"] == "k1"

    confirmed = _invoke(tmp_path, "reset", "--yes")
    assert confirmed.exit_code == 0, confirmed.output
    assert _records(tmp_path) == {}


def test_register_without_device_id_fails(tmp_path):
    result = _invoke(tmp_path, "register")

    assert result.exit_code == 1
    assert "run 'inkbridge begin' first" in result.output


def test_invalid_store_option(tmp_path):
    result = _invoke(tmp_path, "--store", "sqlite", "status")

    assert result.exit_code != 0


def test_call_rejects_unknown_method(tmp_path):
    result = _invoke(tmp_path, "call", "/weather", "-X", "PATCH")

    assert result.exit_code != 0


def test_memory_store_leaves_no_credentials_file(tmp_path):
    result = _invoke(tmp_path, "--store", "memory", "set-api-key", "k1")

    assert result.exit_code == 0, result.output
    assert not (tmp_path / "credentials.yaml").exists()
