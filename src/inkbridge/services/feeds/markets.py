from __future__ import annotations

from inkbridge.domain import ResourceKind, Response
from inkbridge.services.projection import as_float, as_str, by_key

from .base import Feed


class Markets(Feed):
    """Stock and crypto quotes. The array variants share the quote's cache slot."""

    def stock(self, symbol: str = "") -> Response:
        return self._keep(ResourceKind.STOCK, self._bridge.post("/stock", symbol=symbol))

    def stock_series(self, symbol: str = "", days: int = 7) -> Response:
        return self._keep(ResourceKind.STOCK, self._bridge.post("/stock/array", {"days": days}, symbol=symbol))

    def _stock(self) -> object:
        return self._data(ResourceKind.STOCK, self.stock)

    def stock_price(self) -> float:
        return as_float(by_key(self._stock(), "price"))

    def stock_percent(self) -> float:
        return as_float(by_key(self._stock(), "change_percent"))

    def stock_symbol(self) -> str:
        return as_str(by_key(self._stock(), "symbol"))

    def stock_high(self) -> float:
        return as_float(by_key(self._stock(), "day_high"))

    def stock_low(self) -> float:
        return as_float(by_key(self._stock(), "day_low"))

    def crypto(self, symbol: str = "") -> Response:
        return self._keep(ResourceKind.CRYPTO, self._bridge.post("/crypto", symbol=symbol))

    def crypto_series(self, symbol: str = "", days: int = 7) -> Response:
        return self._keep(ResourceKind.CRYPTO, self._bridge.post("/crypto/array", {"days": days}, symbol=symbol))

    def _crypto(self) -> object:
        return self._data(ResourceKind.CRYPTO, self.crypto)

    def crypto_price(self) -> float:
        return as_float(by_key(self._crypto(), "price"))

    def crypto_percent(self) -> float:
        return as_float(by_key(self._crypto(), "change_percent"))

    def crypto_symbol(self) -> str:
        return as_str(by_key(self._crypto(), "symbol"))

    def crypto_name(self) -> str:
        return as_str(by_key(self._crypto(), "name"))
