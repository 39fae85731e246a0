"""Per-resource response slots with fetch-on-miss semantics."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable

from inkbridge.domain import ResourceKind, Response

__all__ = ["ResourceCache"]

_log = logging.getLogger("inkbridge.cache")


class ResourceCache:
    """Holds the last :class:`Response` per :class:`ResourceKind`.

    A slot counts as populated once a response carrying data was stored in
    it. An HTTP error with a JSON body therefore stays cached, while a
    failure without data (no network, exhausted retries, unparseable body)
    is fetched again by the next read. ``refetch_failed`` extends refetching
    to every slot whose stored outcome is not OK. Not thread-safe.
    """

    def __init__(self, kinds: Iterable[ResourceKind] = tuple(ResourceKind), *, refetch_failed: bool = False) -> None:
        self._slots: Dict[ResourceKind, Response | None] = {kind: None for kind in kinds}
        self.refetch_failed = refetch_failed

    def _check(self, kind: ResourceKind) -> ResourceKind:
        kind = ResourceKind(kind)
        if kind not in self._slots:
            raise KeyError(f"no cache slot for {kind}")
        return kind

    def is_populated(self, kind: ResourceKind) -> bool:
        slot = self._slots[self._check(kind)]
        if slot is None or slot.data is None:
            return False
        if self.refetch_failed and not slot.ok:
            return False
        return True

    def peek(self, kind: ResourceKind) -> Response | None:
        return self._slots[self._check(kind)]

    def store(self, kind: ResourceKind, response: Response) -> Response:
        self._slots[self._check(kind)] = response
        return response

    def get_or_fetch(self, kind: ResourceKind, fetch: Callable[[], Response]) -> Response:
        kind = self._check(kind)
        if self.is_populated(kind):
            cached = self._slots[kind]
            assert cached is not None
            return cached
        _log.debug("cache miss for %s", kind)
        return self.store(kind, fetch())

    def invalidate(self, kind: ResourceKind | None = None) -> None:
        if kind is None:
            for key in self._slots:
                self._slots[key] = None
            return
        self._slots[self._check(kind)] = None

    def snapshot(self) -> Dict[str, str | None]:
        return {kind.value: (slot.status if slot is not None else None) for kind, slot in self._slots.items()}
