# src/inkbridge/services/transport.py
from __future__ import annotations

from typing import Any, Callable, Mapping
import json
import logging
import time

import httpx

from inkbridge.config.const import CONNECT_TIMEOUT_S, MAX_ATTEMPTS, REQUEST_TIMEOUT_S, RETRY_DELAY_S
from inkbridge.domain import DeviceState, ErrorKind, HttpMethod, Outcome, Response
from inkbridge.ports import NetworkProbe

from .logging import redact_url

__all__ = ["Transport"]

_log = logging.getLogger("inkbridge.transport")


def _parse_json(body: bytes) -> tuple[Any | None, bool]:
    if not body:
        return None, False
    try:
        return json.loads(body), True
    except ValueError:
        return None, False


class Transport:
    """HTTPS caller for the bridge backend.

    Identity is read from the shared :class:`DeviceState` at call time, so a
    key obtained by registration is used by the very next request. A fresh
    client is opened per call and closed afterwards.
    """

    def __init__(
        self,
        state: DeviceState,
        probe: NetworkProbe,
        *,
        verify: bool | str = False,
        timeout: float = REQUEST_TIMEOUT_S,
        connect_timeout: float = CONNECT_TIMEOUT_S,
        max_attempts: int = MAX_ATTEMPTS,
        retry_delay: float = RETRY_DELAY_S,
        http_transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._state = state
        self._probe = probe
        self.verify = verify
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self.max_attempts = max(1, max_attempts)
        self.retry_delay = retry_delay
        self._http_transport = http_transport
        self._sleep = sleep

    # ---------- request assembly ----------------------------------------------
    def build_url(self, endpoint: str) -> str:
        return f"{self._state.api_base_url}{endpoint}"

    def build_params(self, method: HttpMethod) -> dict[str, str] | None:
        if method is not HttpMethod.GET:
            return None
        params = {"device_id": self._state.device_id}
        if self._state.api_key:
            params["api_key"] = self._state.api_key
        return params

    def build_headers(self, method: HttpMethod) -> dict[str, str]:
        headers = {"x-device-id": self._state.device_id}
        if self._state.api_key:
            headers["x-api-key"] = self._state.api_key
        if method is HttpMethod.POST:
            headers["Content-Type"] = "application/json"
        return headers

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=self.connect_timeout),
            verify=self.verify,
            transport=self._http_transport,
        )

    # ---------- public API ----------------------------------------------------
    def send(self, endpoint: str, method: HttpMethod | str = HttpMethod.GET, body: Mapping[str, Any] | None = None) -> Response:
        method = HttpMethod(str(method).upper())
        if not self._probe.is_connected():
            _log.error("network not connected", extra={"endpoint": endpoint})
            return Response(Outcome.failure(ErrorKind.WIFI_DISCONNECTED))

        url = self.build_url(endpoint)
        params = self.build_params(method)
        headers = self.build_headers(method)
        content = json.dumps(dict(body or {}), ensure_ascii=False).encode("utf-8") if method is HttpMethod.POST else None

        try:
            client = self._client()
        except MemoryError:
            _log.error("could not allocate http client", extra={"endpoint": endpoint})
            return Response(Outcome.failure(ErrorKind.ALLOCATION_ERROR))

        with client:
            try:
                request = client.build_request(method.value, url, params=params, headers=headers, content=content)
            except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
                _log.error("connect failed for %s: %s", endpoint, exc)
                return Response(Outcome.failure(ErrorKind.CONNECT_FAILED))

            shown = redact_url(str(request.url))
            response: httpx.Response | None = None
            for attempt in range(1, self.max_attempts + 1):
                try:
                    response = client.send(request)
                    break
                except httpx.UnsupportedProtocol as exc:
                    _log.error("connect failed for %s: %s", shown, exc)
                    return Response(Outcome.failure(ErrorKind.CONNECT_FAILED))
                except httpx.DecodingError as exc:
                    _log.error("%s %s -> body could not be decoded: %s", method.value, shown, exc)
                    return Response(Outcome.failure(ErrorKind.JSON_PARSE_ERROR))
                except httpx.TransportError as exc:
                    _log.warning(
                        "%s %s attempt %d/%d failed: %s",
                        method.value,
                        shown,
                        attempt,
                        self.max_attempts,
                        exc,
                    )
                    if attempt < self.max_attempts:
                        self._sleep(self.retry_delay)

        if response is None:
            _log.error("%s %s gave up after %d attempts", method.value, shown, self.max_attempts)
            return Response(Outcome.failure(ErrorKind.TRANSPORT_ERROR))
        return self._classify(method, shown, response)

    def _classify(self, method: HttpMethod, shown: str, response: httpx.Response) -> Response:
        data, parsed = _parse_json(response.content)
        code = response.status_code
        if code >= 400:
            _log.error("%s %s -> %d %s", method.value, shown, code, response.text[:200])
            return Response(Outcome.http_error(code), data)
        if not parsed:
            _log.error("%s %s -> %d with unparseable body", method.value, shown, code)
            return Response(Outcome.failure(ErrorKind.JSON_PARSE_ERROR))
        _log.info("%s %s -> %d", method.value, shown, code)
        return Response(Outcome.ok(code), data)
