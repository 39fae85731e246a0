from __future__ import annotations

from inkbridge.domain import ResourceKind, Response
from inkbridge.services.projection import as_str, by_key

from .base import Feed


class Travel(Feed):
    """Route estimates. Readers never trigger a fetch: a route needs its endpoints."""

    def route(self, origin: str, destination: str, mode: str = "driving") -> Response:
        response = self._bridge.post("/travel", {"mode": mode}, origin=origin, destination=destination)
        return self._keep(ResourceKind.TRAVEL, response)

    def _field(self, key: str) -> str:
        cached = self._bridge.cache.peek(ResourceKind.TRAVEL)
        if cached is None:
            return ""
        return as_str(by_key(cached.data, key))

    def duration(self) -> str:
        return self._field("duration_traffic_text")

    def distance(self) -> str:
        return self._field("distance_text")

    def origin(self) -> str:
        return self._field("start_address")

    def destination(self) -> str:
        return self._field("end_address")

    def mode(self) -> str:
        return self._field("mode")
