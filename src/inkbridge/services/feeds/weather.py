from __future__ import annotations

from inkbridge.domain import ResourceKind, Response
from inkbridge.services.projection import as_bool, as_float, as_int, as_str, by_key, size

from .base import Feed, pick


class Weather(Feed):
    """Current conditions, forecast, history and astronomy."""

    # current --------------------------------------------------------------
    def current(self, location: str = "") -> Response:
        return self._keep(ResourceKind.WEATHER, self._bridge.post("/weather", location=location))

    def _current(self) -> object:
        return self._data(ResourceKind.WEATHER, self.current)

    def temperature(self) -> float:
        return as_float(by_key(self._current(), "temperature"))

    def condition(self) -> str:
        return as_str(by_key(self._current(), "condition"))

    def description(self) -> str:
        return as_str(by_key(self._current(), "description"))

    def location(self) -> str:
        return as_str(by_key(self._current(), "location"))

    # forecast -------------------------------------------------------------
    def forecast(self, location: str = "", days: int = 3) -> Response:
        response = self._bridge.post("/weather/forecast", {"days": days}, location=location)
        return self._keep(ResourceKind.FORECAST, response)

    def _forecast(self) -> object:
        return self._data(ResourceKind.FORECAST, self.forecast)

    def _forecast_day(self, key: int | str) -> object:
        return pick(by_key(self._forecast(), "forecast"), key, "date")

    def forecast_day_count(self) -> int:
        return size(by_key(self._forecast(), "forecast"))

    def forecast_location(self) -> str:
        return as_str(by_key(self._forecast(), "location"))

    def forecast_date(self, index: int) -> str:
        return as_str(by_key(self._forecast_day(index), "date"))

    def forecast_min_temp(self, key: int | str) -> str:
        return as_str(by_key(self._forecast_day(key), "min_temp"))

    def forecast_max_temp(self, key: int | str) -> str:
        return as_str(by_key(self._forecast_day(key), "max_temp"))

    def forecast_condition(self, key: int | str) -> str:
        return as_str(by_key(self._forecast_day(key), "condition"))

    def forecast_trend(self) -> str:
        return as_str(by_key(self._forecast(), "trend"))

    # history --------------------------------------------------------------
    def history(self, location: str = "", date: str = "") -> Response:
        """``date`` is ``YYYY-MM-DD``."""
        response = self._bridge.post("/weather/history", location=location, date=date)
        return self._keep(ResourceKind.HISTORY, response)

    def _history(self) -> object:
        return self._data(ResourceKind.HISTORY, self.history)

    def _history_day(self, key: int | str) -> object:
        return pick(by_key(self._history(), "history"), key, "date")

    def history_count(self) -> int:
        return size(by_key(self._history(), "history"))

    def history_location(self) -> str:
        return as_str(by_key(self._history(), "location"))

    def history_date(self, index: int) -> str:
        return as_str(by_key(self._history_day(index), "date"))

    def history_avg_temp(self, key: int | str) -> str:
        return as_str(by_key(self._history_day(key), "avg_temp"))

    def history_condition(self, key: int | str) -> str:
        return as_str(by_key(self._history_day(key), "condition"))

    def history_trend(self) -> str:
        return as_str(by_key(self._history(), "trend"))

    # astronomy ------------------------------------------------------------
    def astronomy(self, location: str = "") -> Response:
        return self._keep(ResourceKind.ASTRONOMY, self._bridge.post("/weather/astronomy", location=location))

    def _astronomy(self) -> object:
        return self._data(ResourceKind.ASTRONOMY, self.astronomy)

    def sunrise(self) -> str:
        return as_str(by_key(self._astronomy(), "sunrise"))

    def sunset(self) -> str:
        return as_str(by_key(self._astronomy(), "sunset"))

    def moonrise(self) -> str:
        return as_str(by_key(self._astronomy(), "moonrise"))

    def moonset(self) -> str:
        return as_str(by_key(self._astronomy(), "moonset"))

    def astronomy_location(self) -> str:
        return as_str(by_key(self._astronomy(), "location"))

    def moon_phase(self) -> str:
        return as_str(by_key(self._astronomy(), "moon_phase"))

    def moon_illumination(self) -> int:
        return as_int(by_key(self._astronomy(), "moon_illumination"))

    def is_daytime(self) -> bool:
        return as_bool(by_key(self._astronomy(), "is_daytime"))
