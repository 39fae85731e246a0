from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from inkbridge.domain import ResourceKind, Response
from inkbridge.services.projection import by_index, find_by

if TYPE_CHECKING:  # pragma: no cover
    from inkbridge.services.bridge import InkBridge


class Feed:
    def __init__(self, bridge: "InkBridge") -> None:
        self._bridge = bridge

    def _keep(self, kind: ResourceKind, response: Response) -> Response:
        return self._bridge.cache.store(kind, response)

    def _data(self, kind: ResourceKind, fetch: Callable[[], Response]) -> Any:
        return self._bridge.get_cached(kind, fetch).data


def pick(items: Any, key: int | str, field: str) -> Any:
    """Element of ``items`` by position, or the first one whose ``field`` equals ``key``."""
    if isinstance(key, int):
        return by_index(items, key)
    return find_by(items, field, key)
