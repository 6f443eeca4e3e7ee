# In-memory projections: record what a map / list surface would show.
# listy/projections/memory.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core.sync import MarkerContent
from ..providers.base import Coordinate, Place


@dataclass
class MemoryMapProjection:
    markers: Dict[str, Tuple[Coordinate, MarkerContent]] = field(default_factory=dict)
    center: Optional[Coordinate] = None
    zoom: Optional[int] = None
    open_detail_id: Optional[str] = None
    user_position: Optional[Tuple[Coordinate, str]] = None
    on_marker_click: Optional[Callable[[str], None]] = None

    def add_marker(self, place_id: str, coordinate: Coordinate, content: MarkerContent) -> None:
        self.markers[place_id] = (coordinate, content)

    def remove_all_markers(self) -> None:
        self.markers = {}
        self.open_detail_id = None

    def focus(self, coordinate: Coordinate, zoom: int) -> None:
        self.center = coordinate
        self.zoom = zoom

    def open_detail(self, place_id: str) -> None:
        if place_id in self.markers:
            self.open_detail_id = place_id

    def show_user_position(self, coordinate: Coordinate, label: str) -> None:
        self.user_position = (coordinate, label)

    def click_marker(self, place_id: str) -> None:
        if self.on_marker_click is not None:
            self.on_marker_click(place_id)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "marker_ids": list(self.markers),
            "center": None if self.center is None else [self.center.latitude, self.center.longitude],
            "zoom": self.zoom,
            "open_detail_id": self.open_detail_id,
            "user_position": None
            if self.user_position is None
            else [self.user_position[0].latitude, self.user_position[0].longitude],
        }


@dataclass
class MemoryListProjection:
    rows: List[str] = field(default_factory=list)
    highlighted_id: Optional[str] = None
    scrolled_to_id: Optional[str] = None
    on_row_click: Optional[Callable[[str], None]] = None

    def render_rows(self, places: List[Place]) -> None:
        self.rows = [p.id for p in places]
        self.highlighted_id = None
        self.scrolled_to_id = None

    def highlight_row(self, place_id: str) -> None:
        if place_id in self.rows:
            self.highlighted_id = place_id

    def scroll_row_into_view(self, place_id: str) -> None:
        if place_id in self.rows:
            self.scrolled_to_id = place_id

    def click_row(self, place_id: str) -> None:
        if self.on_row_click is not None:
            self.on_row_click(place_id)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "row_ids": list(self.rows),
            "highlighted_id": self.highlighted_id,
            "scrolled_to_id": self.scrolled_to_id,
        }
