from __future__ import annotations

import pytest

from inkbridge.adapters.network import StaticNetworkProbe
from inkbridge.adapters.store import MemoryCredentialStore
from inkbridge.domain import ErrorKind, RegistrationState

SUCCESS = {"status": "success", "api_key": "k1", "friendly_user_id": "f1", "uid": "u1"}


def test_registered_device_skips_setup(make_bridge, backend, registered_store):
    bridge = make_bridge(store=registered_store)

    assert bridge.begin() is True
    assert bridge.is_registered()
    assert backend.calls("/setup") == []
    assert bridge.friendly_id == "f1"
    assert bridge.last_error is None


def test_fresh_device_derives_id_and_registers(make_bridge, backend, store):
    backend.route("/setup", body=SUCCESS)
    bridge = make_bridge()

    assert bridge.begin() is True
    assert bridge.device_id == "AABBCC112233"
    assert bridge.is_registered()
    assert bridge.api_key == "k1"
    assert bridge.uid == "u1"
    assert bridge.friendly_id == "f1"
    assert bridge.registration_state is RegistrationState.REGISTERED
    assert len(backend.calls("/setup")) == 1
    assert store.snapshot() == {
        "deviceId": "AABBCC112233",
        "apikey": "k1",
        "friendlyuser": "f1",
        "uid": "u1",
    }


def test_setup_request_is_a_bodiless_get_with_device_id(make_bridge, backend):
    backend.route("/setup", body=SUCCESS)
    make_bridge().begin()

    request = backend.calls("/setup")[0]
    assert request.method == "GET"
    assert request.content == b""
    assert request.url.params["device_id"] == "AABBCC112233"
    assert "api_key" not in request.url.params


def test_rejected_registration_persists_nothing(make_bridge, backend, store):
    backend.route("/setup", body={"status": "error", "message": "device banned"})
    bridge = make_bridge()

    assert bridge.begin() is False
    assert not bridge.is_registered()
    assert bridge.last_error is ErrorKind.REGISTRATION_REJECTED
    assert bridge.last_error_reason == "device banned"
    assert set(store.snapshot()) == {"deviceId"}


def test_rejection_without_message_has_empty_reason(make_bridge, backend):
    backend.route("/setup", body={"status": "pending"})
    bridge = make_bridge()

    assert bridge.begin() is False
    assert bridge.last_error is ErrorKind.REGISTRATION_REJECTED
    assert bridge.last_error_reason == ""


def test_transport_error_during_registration(make_bridge, backend, store, sleeps):
    backend.offline = True
    bridge = make_bridge()

    assert bridge.begin() is False
    assert bridge.last_error is ErrorKind.REGISTRATION_FAILED
    assert bridge.last_error_reason == "TRANSPORT_ERROR"
    assert len(backend.calls("/setup")) == 3
    assert "apikey" not in store.snapshot()


def test_http_error_during_registration(make_bridge, backend):
    backend.route("/setup", 503, {"message": "maintenance"})
    bridge = make_bridge()

    assert bridge.begin() is False
    assert bridge.last_error is ErrorKind.REGISTRATION_FAILED
    assert bridge.last_error_reason == "HTTP_ERROR_503"


def test_missing_fields_in_success_envelope_become_empty(make_bridge, backend):
    backend.route("/setup", body={"status": "success", "api_key": "k1"})
    bridge = make_bridge()

    assert bridge.begin() is True
    assert bridge.api_key == "k1"
    assert bridge.uid == ""
    assert not bridge.is_registered()


def test_no_network_and_no_stored_id_fails_bootstrap(make_bridge, backend):
    bridge = make_bridge(probe=StaticNetworkProbe(connected=False))

    assert bridge.begin() is False
    assert bridge.last_error is ErrorKind.IDENTITY_UNAVAILABLE
    assert bridge.last_error_reason == "NETWORK_REQUIRED"
    assert backend.requests == []


def test_stored_id_needs_no_network_for_identity(make_bridge, backend, registered_store):
    bridge = make_bridge(store=registered_store, probe=StaticNetworkProbe(connected=False))

    assert bridge.begin() is True
    assert bridge.device_id == "AABBCC112233"


def test_registration_attempted_once_per_begin(make_bridge, backend):
    backend.route("/setup", body={"status": "error", "message": "no"})
    bridge = make_bridge()

    bridge.begin()
    bridge.begin()
    assert len(backend.calls("/setup")) == 2


def test_null_literal_records_are_treated_as_absent(make_bridge, backend):
    store = MemoryCredentialStore({"deviceId": "null", "apikey": "null", "uid": "null"})
    backend.route("/setup", body=SUCCESS)
    bridge = make_bridge(store=store)

    assert bridge.begin() is True
    assert bridge.device_id == "AABBCC112233"
    assert bridge.api_key == "k1"


def test_persisted_api_url_overrides_default(make_bridge, backend, registered_store):
    registered_store.save("apiurl", "https://staging.test/api")
    bridge = make_bridge(store=registered_store)
    bridge.begin()

    assert bridge.api_url == "https://staging.test/api"


def test_reset_device_wipes_state_and_reregisters(make_bridge, backend, registered_store):
    registered_store.save("apiurl", "https://old.test/api")
    backend.route("/setup", body={"status": "success", "api_key": "k2", "friendly_user_id": "f2", "uid": "u2"})
    bridge = make_bridge(store=registered_store, reset_device=True)

    assert bridge.begin() is True
    assert bridge.api_key == "k2"
    assert bridge.api_url == "https://api.test/api"
    assert "apiurl" not in registered_store.snapshot()
    assert len(backend.calls("/setup")) == 1


def test_factory_reset_then_reload_rederives_same_id(make_bridge, backend, store):
    backend.route("/setup", body=SUCCESS)
    bridge = make_bridge()
    bridge.begin()

    bridge.factory_reset()
    for key in ("deviceId", "uid", "apikey", "apiurl", "friendlyuser"):
        assert store.load(key) is None
    assert bridge.device_id == ""
    assert not bridge.is_registered()

    assert bridge.begin() is True
    assert bridge.device_id == "AABBCC112233"


def test_set_api_key_persists_and_ignores_empty(make_bridge, store):
    bridge = make_bridge()
    bridge.set_api_key("")
    assert store.load("apikey") is None

    bridge.set_api_key("manual")
    assert bridge.api_key == "manual"
    assert store.load("apikey") == "manual"


def test_manual_key_skips_auto_registration(make_bridge, backend, store):
    store.save("deviceId", "AABBCC112233")
    store.save("uid", "u9")
    store.save("apikey", "manual")
    bridge = make_bridge()

    assert bridge.begin() is True
    assert backend.calls("/setup") == []


def test_load_config_reads_records_without_network(make_bridge, registered_store):
    bridge = make_bridge(store=registered_store, probe=StaticNetworkProbe(connected=False))

    assert bridge.load_config() is True
    assert bridge.identity.device_id == "AABBCC112233"
    assert bridge.credentials.api_key == "k1"


def test_load_config_on_empty_store(make_bridge):
    bridge = make_bridge()

    assert bridge.load_config() is False
    assert bridge.friendly_id == "Unknown"


def test_unavailable_store_still_bootstraps_in_memory(make_bridge, backend):
    backend.route("/setup", body=SUCCESS)
    store = MemoryCredentialStore(available=False)
    bridge = make_bridge(store=store)

    assert bridge.begin() is True
    assert bridge.is_registered()
    assert store.snapshot() == {}


def test_constructor_url_used_for_requests(make_bridge, backend):
    backend.route("/setup", body=SUCCESS)
    bridge = make_bridge(api_base_url="https://api.test/api")
    bridge.begin()

    assert str(backend.requests[0].url).startswith("https://api.test/api/setup?")


@pytest.mark.parametrize("fields", [{}, {"location": ""}, {"location": None}])
def test_request_body_drops_empty_optionals(make_bridge, registered_store, fields):
    bridge = make_bridge(store=registered_store)
    bridge.begin()

    assert bridge.request_body(None, **fields) == {"uid": "u1", "device_id": "AABBCC112233"}


def test_network_ready_follows_probe(make_bridge, probe):
    bridge = make_bridge()

    assert bridge.network_ready is True
    probe.connected = False
    assert bridge.network_ready is False
