from __future__ import annotations

from inkbridge.domain import ResourceKind, Response
from inkbridge.services.projection import as_str, by_key, dig, size

from .base import Feed


class News(Feed):
    def headlines(self, category: str = "general") -> Response:
        return self._keep(ResourceKind.NEWS, self._bridge.post("/news", {"category": category}))

    def _articles(self) -> object:
        return by_key(self._data(ResourceKind.NEWS, self.headlines), "articles")

    def article_count(self) -> int:
        return size(self._articles())

    def article_title(self, index: int) -> str:
        return as_str(dig(self._articles(), index, "title"))

    def article_source(self, index: int) -> str:
        return as_str(dig(self._articles(), index, "source", "name"))
