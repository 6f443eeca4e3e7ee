"""Session-scoped cache holding the last nearby-search result.

A single entry is kept. It is reused only while it is younger than
`max_age` and the new origin lies within `max_drift_km` of the origin it was
captured at. The storage format lives in `CacheEntry.to_json`/`from_json`
and is independent of that validity rule.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from ..providers.base import Coordinate, Place
from ..providers.overpass import normalize_elements
from .config import settings
from .distance import distance_km

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemorySessionStore:
    """Key/value strings that live as long as the session object."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()


@dataclass(frozen=True)
class CacheEntry:
    origin: Coordinate
    captured_at: datetime
    places: Tuple[Place, ...]

    def is_valid_for(
        self,
        origin: Coordinate,
        now: datetime,
        max_age: timedelta,
        max_drift_km: float,
    ) -> bool:
        if now - self.captured_at >= max_age:
            return False
        return distance_km(self.origin, origin) < max_drift_km

    def to_json(self) -> str:
        return json.dumps(
            {
                "lat": self.origin.latitude,
                "lng": self.origin.longitude,
                "data": [p.to_element() for p in self.places],
                "timestamp": int(self.captured_at.timestamp() * 1000),
            }
        )

    @classmethod
    def from_json(cls, raw: str) -> "CacheEntry":
        """Raises ValueError (or KeyError/TypeError) when `raw` is not a stored entry."""
        payload = json.loads(raw)
        origin = Coordinate(latitude=float(payload["lat"]), longitude=float(payload["lng"]))
        captured_at = datetime.fromtimestamp(int(payload["timestamp"]) / 1000.0, tz=timezone.utc)
        places = tuple(normalize_elements(payload["data"]))
        return cls(origin=origin, captured_at=captured_at, places=places)


class SpatialTemporalCache:
    def __init__(
        self,
        store: SessionStore,
        key: str = settings.cache_key,
        max_age: timedelta = timedelta(seconds=settings.cache_max_age_s),
        max_drift_km: float = settings.cache_max_drift_km,
    ):
        self.session_store = store
        self.key = key
        self.max_age = max_age
        self.max_drift_km = max_drift_km

    def _load(self) -> Optional[CacheEntry]:
        raw = self.session_store.get(self.key)
        if raw is None:
            return None
        try:
            return CacheEntry.from_json(raw)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("discarding unreadable cache entry: %s", e)
            return None

    def lookup(self, origin: Coordinate, now: datetime) -> Optional[List[Place]]:
        """
        Returns the cached places when the stored entry is still valid for `origin` at `now`,
        otherwise None. A valid entry with no places returns an empty list.
        """
        entry = self._load()
        if entry is None:
            logger.debug("cache miss: no entry")
            return None
        try:
            valid = entry.is_valid_for(origin, now, self.max_age, self.max_drift_km)
        except TypeError as e:
            # naive `now` against the stored UTC timestamp
            logger.warning("cache lookup with incomparable timestamp: %s", e)
            return None
        if not valid:
            logger.debug("cache miss: entry from %s at %s is stale", entry.captured_at, entry.origin)
            return None
        logger.info("using cached data (%d places)", len(entry.places))
        return [replace(p, tags=dict(p.tags), selected=False) for p in entry.places]

    def store(self, origin: Coordinate, now: datetime, places: Sequence[Place]) -> CacheEntry:
        entry = CacheEntry(origin=origin, captured_at=now, places=tuple(places))
        self.session_store.set(self.key, entry.to_json())
        return entry

    def clear(self) -> None:
        self.session_store.remove(self.key)
