from __future__ import annotations

from inkbridge.domain import ResourceKind, Response
from inkbridge.services.projection import as_str, by_key, dig, size

from .base import Feed


class Calendar(Feed):
    def events(self, range_: str = "1d") -> Response:
        return self._keep(ResourceKind.CALENDAR, self._bridge.post("/calendar", {"range": range_}))

    def _events(self) -> object:
        return by_key(self._data(ResourceKind.CALENDAR, self.events), "events")

    def event_count(self) -> int:
        return size(self._events())

    def event_time(self, index: int) -> str:
        return as_str(dig(self._events(), index, "start"))

    def event_title(self, index: int) -> str:
        return as_str(dig(self._events(), index, "summary"))

    def event_location(self, index: int) -> str:
        return as_str(dig(self._events(), index, "location"))
