"""Domain accessors built on top of :class:`inkbridge.services.bridge.InkBridge`."""
from .calendar import Calendar
from .canvas import Canvas
from .markets import Markets
from .news import News
from .spotify import Spotify
from .travel import Travel
from .weather import Weather

__all__ = ["Calendar", "Canvas", "Markets", "News", "Spotify", "Travel", "Weather"]
