# Error taxonomy shared by geolocation, remote queries and the API.
# listy/core/errors.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class GeoErrorCategory(str, Enum):
    """User-facing failure categories."""

    UNSUPPORTED = "Unsupported"
    PERMISSION_HARD_BLOCKED = "PermissionHardBlocked"
    PERMISSION_PROMPT_PENDING = "PermissionPromptPending"
    PERMISSION_UNKNOWN = "PermissionUnknown"
    POSITION_UNAVAILABLE = "PositionUnavailable"
    TIMEOUT = "Timeout"
    REMOTE_SERVICE_ERROR = "RemoteServiceError"
    UNKNOWN = "Unknown"


class GeolocationErrorCode(IntEnum):
    """Codes reported by a geolocation capability (W3C numbering)."""

    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


class ListyError(Exception):
    """Base class for recoverable discovery failures."""


class GeolocationFailure(ListyError):
    def __init__(self, code: Optional[int], message: str = ""):
        super().__init__(message or f"geolocation failure (code={code})")
        self.code = code
        self.message = message


class GeolocationUnsupported(GeolocationFailure):
    def __init__(self, message: str = "Geolocation not supported"):
        super().__init__(None, message)


class RemoteServiceError(ListyError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class ClassifiedGeoError:
    category: GeoErrorCategory
    message: str
