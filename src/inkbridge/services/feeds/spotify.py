from __future__ import annotations

from inkbridge.domain import Response

from .base import Feed


class Spotify(Feed):
    """Music-service control proxied by the backend. Nothing here is cached."""

    def request(self, endpoint: str, method: str = "GET", body: str = "") -> Response:
        return self._bridge.post("/spotify/request", {"endpoint": endpoint, "method": method}, body=body)

    def albums(self, limit: int = 5, offset: int = 0) -> Response:
        return self._bridge.post("/spotify/user_albums", {"limit": limit, "offset": offset})

    def playlists(self, limit: int = 5, offset: int = 0) -> Response:
        return self._bridge.post("/spotify/user_playlists", {"limit": limit, "offset": offset})

    def liked_songs(self, limit: int = 5, offset: int = 0) -> Response:
        return self._bridge.post("/spotify/liked_songs", {"limit": limit, "offset": offset})

    def followed_artists(self, limit: int = 5, after: str = "") -> Response:
        return self._bridge.post("/spotify/followed_artists", {"limit": limit}, after=after)

    def devices(self) -> Response:
        return self._bridge.post("/spotify/devices")

    def playback(
        self,
        action: str,
        uri: str = "",
        volume: int | None = None,
        position_ms: int | None = None,
        state: str = "",
        target_device_id: str = "",
    ) -> Response:
        return self._bridge.post(
            "/spotify/playback",
            {"action": action},
            uri=uri,
            volume_percent=volume,
            position_ms=position_ms,
            state=state,
            target_device_id=target_device_id,
        )
