"""Single-shot position acquisition on top of a pluggable geolocation capability.

The capability is whatever can report a position for the user: a browser
bridge, a device API, or a position the client already resolved and sent to
the API. The acquirer only enforces the acquisition policy and guarantees
that a returned sample always carries a valid coordinate.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Protocol, Tuple
from urllib.parse import urlparse

from ..providers.base import Coordinate, LocationSample
from .errors import GeolocationErrorCode, GeolocationFailure, GeolocationUnsupported

logger = logging.getLogger(__name__)

_LOCAL_HOSTS = {"localhost", "127.0.0.1"}


@dataclass(frozen=True)
class PositionOptions:
    # Low accuracy resolves faster and more reliably on mobile.
    high_accuracy: bool = False
    timeout_ms: int = 20_000
    max_cached_age_ms: int = 30_000


class GeolocationCapability(Protocol):
    async def get_current_position(self, options: PositionOptions) -> Dict[str, Any]:
        """
        Returns {"latitude": float, "longitude": float}.
        Raises GeolocationFailure with a GeolocationErrorCode on denial/unavailability/timeout.
        """
        ...


class PermissionQuery(Protocol):
    async def query(self, name: str) -> str:
        """Returns "granted", "denied" or "prompt"."""
        ...


class ReportedPositionCapability:
    """
    Replays a position (or failure) that a remote client already resolved,
    e.g. the coordinates a browser posted to the API.
    """

    def __init__(
        self,
        position: Optional[Tuple[float, float]] = None,
        failure: Optional[GeolocationFailure] = None,
    ):
        if position is None and failure is None:
            raise ValueError("either position or failure is required")
        self.position = position
        self.failure = failure

    async def get_current_position(self, options: PositionOptions) -> Dict[str, Any]:
        if self.failure is not None:
            raise self.failure
        lat, lng = self.position
        return {"latitude": lat, "longitude": lng}


class ReportedPermissionState:
    def __init__(self, state: str = "prompt", query_failed: bool = False):
        self.state = state
        self.query_failed = query_failed

    async def query(self, name: str) -> str:
        if self.query_failed:
            raise RuntimeError(f"permission query for {name!r} failed")
        return self.state


def is_secure_origin(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme == "https" or (parsed.hostname or "") in _LOCAL_HOSTS


async def query_permission_state(permissions: Optional[PermissionQuery]) -> Tuple[Optional[str], bool]:
    """
    Ask the platform for the location permission state.
    Returns (state, query_failed); state is None when the query is unsupported or failed.
    """
    if permissions is None:
        return None, False
    try:
        return await permissions.query("geolocation"), False
    except Exception as e:
        logger.debug("permission query failed: %s", e)
        return None, True


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_coordinate(raw: Any) -> Coordinate:
    if not isinstance(raw, dict):
        raise GeolocationFailure(GeolocationErrorCode.POSITION_UNAVAILABLE, "malformed position")
    lat = raw.get("latitude")
    lng = raw.get("longitude")
    for v in (lat, lng):
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise GeolocationFailure(GeolocationErrorCode.POSITION_UNAVAILABLE, "malformed position")
    try:
        return Coordinate(latitude=float(lat), longitude=float(lng))
    except ValueError as e:
        raise GeolocationFailure(GeolocationErrorCode.POSITION_UNAVAILABLE, str(e)) from e


class LocationAcquirer:
    def __init__(
        self,
        capability: Optional[GeolocationCapability],
        options: Optional[PositionOptions] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.capability = capability
        self.options = options or PositionOptions()
        self.clock = clock

    async def acquire(self) -> LocationSample:
        if self.capability is None:
            raise GeolocationUnsupported()

        try:
            raw = await asyncio.wait_for(
                self.capability.get_current_position(self.options),
                timeout=self.options.timeout_ms / 1000.0,
            )
        except asyncio.TimeoutError as e:
            raise GeolocationFailure(GeolocationErrorCode.TIMEOUT, "position acquisition timed out") from e

        coordinate = _coerce_coordinate(raw)
        return LocationSample(coordinate=coordinate, acquired_at=self.clock())
