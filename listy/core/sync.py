"""Keeps the map and list projections of the place store pointing at one selection.

The two projections never reference each other. A marker click or a row
click reports a place id to `SyncController.select`, which resolves it
through the store and drives both projections.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol

from ..providers.base import Coordinate, Place
from .place_store import PlaceStore
from .view_state import place_icon

logger = logging.getLogger(__name__)

FOCUS_ZOOM = 17
ORIGIN_ZOOM = 15
USER_POSITION_LABEL = "Estás aquí"


@dataclass(frozen=True)
class MarkerContent:
    name: str
    address: str
    category: str
    icon: str
    color: str

    @classmethod
    def for_place(cls, place: Place) -> "MarkerContent":
        icon, color = place_icon(place.amenity)
        return cls(
            name=place.name or "Sin nombre",
            address=place.address,
            category=place.category or "",
            icon=icon,
            color=color,
        )


class MapProjection(Protocol):
    def add_marker(self, place_id: str, coordinate: Coordinate, content: MarkerContent) -> None: ...

    def remove_all_markers(self) -> None: ...

    def focus(self, coordinate: Coordinate, zoom: int) -> None: ...

    def open_detail(self, place_id: str) -> None: ...

    def show_user_position(self, coordinate: Coordinate, label: str) -> None: ...


class ListProjection(Protocol):
    def render_rows(self, places: List[Place]) -> None: ...

    def highlight_row(self, place_id: str) -> None: ...

    def scroll_row_into_view(self, place_id: str) -> None: ...


class SyncController:
    def __init__(self, store: PlaceStore, map_projection: MapProjection, list_projection: ListProjection):
        self.store = store
        self.map = map_projection
        self.list = list_projection
        self._selected: Optional[Place] = None

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected.id if self._selected is not None else None

    def focus_origin(self, coordinate: Coordinate) -> None:
        """Center the map on the acquired origin and mark the user there."""
        self.map.focus(coordinate, ORIGIN_ZOOM)
        self.map.show_user_position(coordinate, USER_POSITION_LABEL)

    def render_all(self, places: Iterable[Place]) -> None:
        places = list(places)
        for p in places:
            p.selected = False
        self.store.replace(places)
        self._selected = None

        self.map.remove_all_markers()
        for p in self.store.all():
            self.map.add_marker(p.id, p.coordinate, MarkerContent.for_place(p))
        self.list.render_rows(self.store.all())

    def select(self, place_id: str) -> None:
        place = self.store.get(place_id)
        if place is None:
            logger.debug("ignoring selection of unknown place id %r", place_id)
            return
        if place is self._selected:
            return

        if self._selected is not None:
            self._selected.selected = False
        place.selected = True
        self._selected = place

        self.map.focus(place.coordinate, FOCUS_ZOOM)
        self.map.open_detail(place.id)
        self.list.scroll_row_into_view(place.id)
        self.list.highlight_row(place.id)
