"""Bootstrap-and-request engine of the InkBridge device client."""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping

import httpx

from inkbridge.config.const import (
    DEFAULT_FRIENDLY_NAME,
    KEY_API_KEY,
    KEY_API_URL,
    KEY_DEVICE_ID,
    KEY_FRIENDLY_USER,
    KEY_UID,
    PERSISTED_KEYS,
)
from inkbridge.domain import (
    Credentials,
    DeviceState,
    ErrorKind,
    HttpMethod,
    Identity,
    RegistrationState,
    ResourceKind,
    Response,
)
from inkbridge.ports import CredentialStore, NetworkProbe

from .cache import ResourceCache
from .feeds import Calendar, Canvas, Markets, News, Spotify, Travel, Weather
from .identity import IdentityResolver, is_absent
from .logging import mask_secret
from .registration import RegistrationFlow
from .settings import BridgeSettings, build_store
from .transport import Transport

__all__ = ["InkBridge"]

_log = logging.getLogger("inkbridge.bridge")


class InkBridge:
    """Owns the device identity and credentials and routes every backend call.

    ``begin()`` establishes identity and registration; afterwards
    :meth:`request` and :meth:`get_cached` serve the domain accessors exposed
    as ``weather``, ``markets``, ``news``, ``calendar``, ``travel``,
    ``canvas`` and ``spotify``. Failures come back as values: a ``False``
    from ``begin()`` with :attr:`last_error` set, or a non-OK
    :class:`Response`.
    """

    def __init__(
        self,
        reset_device: bool = False,
        api_base_url: str | None = None,
        *,
        settings: BridgeSettings | None = None,
        store: CredentialStore | None = None,
        probe: NetworkProbe | None = None,
        http_transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings or BridgeSettings()
        self._reset_device = reset_device
        self._default_url = api_base_url or self.settings.api_base_url
        self._store = store if store is not None else build_store(self.settings)
        if probe is None:
            from inkbridge.adapters.network import PsutilNetworkProbe

            probe = PsutilNetworkProbe()
        self._probe = probe

        self._state = DeviceState(api_base_url=self._default_url)
        self._transport = Transport(
            self._state,
            probe,
            verify=self.settings.verify_tls,
            timeout=self.settings.timeout,
            connect_timeout=self.settings.connect_timeout,
            max_attempts=self.settings.max_attempts,
            retry_delay=self.settings.retry_delay,
            http_transport=http_transport,
            sleep=sleep,
        )
        self._identity = IdentityResolver(self._store, probe)
        self._registration = RegistrationFlow(self._transport, self._store)
        self.cache = ResourceCache(refetch_failed=self.settings.refetch_failed)

        self.last_error: ErrorKind | None = None
        self.last_error_reason: str = ""

        self.weather = Weather(self)
        self.markets = Markets(self)
        self.news = News(self)
        self.calendar = Calendar(self)
        self.travel = Travel(self)
        self.canvas = Canvas(self)
        self.spotify = Spotify(self)

    # ------------------------------------------------------------------
    # Bootstrap
    # ------------------------------------------------------------------
    def begin(self) -> bool:
        if not self._store.is_init():
            _log.info("initialising credential store")
            self._store.init()

        if self._reset_device:
            _log.info("resetting device configuration as requested")
            self.factory_reset()

        records = self._load_records()
        device_id, error = self._identity.resolve_device_id(records.get(KEY_DEVICE_ID))
        if error is not None:
            self._fail(ErrorKind.IDENTITY_UNAVAILABLE, error.value)
            return False
        self._state.device_id = device_id
        self._adopt(records)

        if self._state.device_id and not self._state.api_key:
            _log.info("device not registered; attempting auto-registration")
            return self.register_device()

        self._clear_error()
        return self.is_registered()

    def _load_records(self) -> dict[str, str | None]:
        return {key: self._store.load(key) for key in PERSISTED_KEYS}

    def _adopt(self, records: Mapping[str, str | None]) -> None:
        api_key = records.get(KEY_API_KEY)
        if not is_absent(api_key):
            self._state.api_key = api_key or ""
            _log.info("api key loaded from storage: %s", mask_secret(self._state.api_key))
        friendly = records.get(KEY_FRIENDLY_USER)
        if not is_absent(friendly):
            self._state.friendly_name = friendly or ""
        uid = records.get(KEY_UID)
        if not is_absent(uid):
            self._state.uid = uid or ""
        url = records.get(KEY_API_URL)
        if not is_absent(url):
            self._state.api_base_url = url or ""

    def load_config(self) -> bool:
        """Re-read persisted records into memory. True when any record was present."""
        records = self._load_records()
        device_id = records.get(KEY_DEVICE_ID)
        if not is_absent(device_id):
            self._state.device_id = device_id or ""
        self._adopt(records)
        return any(not is_absent(value) for value in records.values())

    def register_device(self) -> bool:
        result = self._registration.register(self._state.device_id)
        if not result.ok:
            assert result.error is not None
            self._fail(result.error, result.reason)
            return False
        self._state.api_key = result.api_key
        self._state.friendly_name = result.friendly_name
        self._state.uid = result.uid
        self._clear_error()
        return True

    def factory_reset(self) -> None:
        self._store.factory_reset()
        self._state.device_id = ""
        self._state.uid = ""
        self._state.api_key = ""
        self._state.api_base_url = self._default_url
        self._state.friendly_name = DEFAULT_FRIENDLY_NAME
        self.cache.invalidate()

    def _fail(self, kind: ErrorKind, reason: str = "") -> None:
        self.last_error = kind
        self.last_error_reason = reason
        _log.warning("bootstrap step failed: %s %s", kind, reason)

    def _clear_error(self) -> None:
        self.last_error = None
        self.last_error_reason = ""

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    def is_registered(self) -> bool:
        return self._state.registration_state is RegistrationState.REGISTERED

    @property
    def registration_state(self) -> RegistrationState:
        return self._state.registration_state

    def set_api_key(self, key: str) -> None:
        if not key:
            return
        self._state.api_key = key
        self._store.save(KEY_API_KEY, key)
        _log.info("api key set manually")

    def set_api_url(self, url: str) -> None:
        if not url:
            return
        self._state.api_base_url = url
        self._store.save(KEY_API_URL, url)
        _log.info("api url set to %s", url)

    @property
    def device_id(self) -> str:
        return self._state.device_id

    @property
    def friendly_id(self) -> str:
        return self._state.friendly_name

    @property
    def api_key(self) -> str:
        return self._state.api_key

    @property
    def api_url(self) -> str:
        return self._state.api_base_url

    @property
    def uid(self) -> str:
        return self._state.uid

    @property
    def identity(self) -> Identity:
        return self._state.identity()

    @property
    def credentials(self) -> Credentials:
        return self._state.credentials()

    @property
    def network_ready(self) -> bool:
        return self._identity.is_network_ready()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------
    def request(self, endpoint: str, method: HttpMethod | str = HttpMethod.GET, body: Mapping[str, Any] | None = None) -> Response:
        return self._transport.send(endpoint, method, body)

    def request_body(self, required: Mapping[str, Any] | None = None, **optional: Any) -> dict[str, Any]:
        """``uid`` and ``device_id`` plus domain fields; empty optional fields are left out."""
        body: dict[str, Any] = {"uid": self._state.uid, "device_id": self._state.device_id}
        if required:
            body.update(required)
        for key, value in optional.items():
            if value is None or value == "":
                continue
            body[key] = value
        return body

    def post(self, endpoint: str, required: Mapping[str, Any] | None = None, **optional: Any) -> Response:
        return self.request(endpoint, HttpMethod.POST, self.request_body(required, **optional))

    def get_cached(self, kind: ResourceKind, fetch: Callable[[], Response]) -> Response:
        return self.cache.get_or_fetch(kind, fetch)
