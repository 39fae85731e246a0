"""Enumerations describing outcomes, resource kinds and registration states."""
from __future__ import annotations

from enum import Enum

__all__ = [
    "ErrorKind",
    "HttpMethod",
    "RegistrationState",
    "ResourceKind",
]


class _StrEnum(str, Enum):
    """Simple ``str``-backed enum compatible with Python 3.10."""

    def __str__(self) -> str:  # pragma: no cover - convenience for logging only
        return str(self.value)


class ErrorKind(_StrEnum):
    NETWORK_REQUIRED = "NETWORK_REQUIRED"
    WIFI_DISCONNECTED = "WIFI_DISCONNECTED"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    CONNECT_FAILED = "CONNECT_FAILED"
    HTTP_ERROR = "HTTP_ERROR"
    JSON_PARSE_ERROR = "JSON_PARSE_ERROR"
    REGISTRATION_FAILED = "REGISTRATION_FAILED"
    REGISTRATION_REJECTED = "REGISTRATION_REJECTED"
    IDENTITY_UNAVAILABLE = "IDENTITY_UNAVAILABLE"
    ALLOCATION_ERROR = "ALLOCATION_ERROR"


class HttpMethod(_StrEnum):
    GET = "GET"
    POST = "POST"


class RegistrationState(_StrEnum):
    UNREGISTERED = "unregistered"
    REGISTERED = "registered"


class ResourceKind(_StrEnum):
    WEATHER = "weather"
    FORECAST = "forecast"
    HISTORY = "history"
    ASTRONOMY = "astronomy"
    STOCK = "stock"
    CRYPTO = "crypto"
    NEWS = "news"
    CALENDAR = "calendar"
    TRAVEL = "travel"
    LMS_TODOS = "lms_todos"
    LMS_GRADES = "lms_grades"
