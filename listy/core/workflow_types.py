from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..providers.base import LocationSample, Place
from .cache import InMemorySessionStore, SpatialTemporalCache
from .errors import ClassifiedGeoError
from .place_store import PlaceStore
from .view_state import ListState, LocationStatus, StatusView, render_status


@dataclass
class SessionContext:
    session_id: str

    location: Optional[LocationSample] = None
    place_store: PlaceStore = field(default_factory=PlaceStore)
    cache: SpatialTemporalCache = field(default_factory=lambda: SpatialTemporalCache(InMemorySessionStore()))

    # result waiting to be rendered; None means nothing to render this run
    places: Optional[List[Place]] = None
    cache_hit: bool = False

    list_status: StatusView = field(default_factory=lambda: render_status(ListState.LOADING))
    location_status: Optional[LocationStatus] = None
    geo_error: Optional[ClassifiedGeoError] = None
    errors: List[str] = field(default_factory=list)
