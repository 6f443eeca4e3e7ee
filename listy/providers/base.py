# Provider interfaces and dataclasses.
# listy/providers/base.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 position in float degrees."""
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude}")


@dataclass(frozen=True)
class LocationSample:
    coordinate: Coordinate
    acquired_at: datetime


@dataclass
class Place:
    """
    A point of interest normalized from a remote result element.
    `id` is the remote identifier kept verbatim; `selected` is owned by the sync controller.
    """
    id: str
    coordinate: Coordinate
    tags: Dict[str, str] = field(default_factory=dict)
    selected: bool = False

    @property
    def name(self) -> Optional[str]:
        return self.tags.get("name")

    @property
    def amenity(self) -> Optional[str]:
        return self.tags.get("amenity")

    @property
    def cuisine(self) -> Optional[str]:
        return self.tags.get("cuisine")

    @property
    def category(self) -> Optional[str]:
        return self.cuisine or self.amenity

    @property
    def address(self) -> str:
        street = self.tags.get("addr:street") or ""
        number = self.tags.get("addr:housenumber") or ""
        return f"{street} {number}".strip()

    def to_element(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "lat": self.coordinate.latitude,
            "lon": self.coordinate.longitude,
            "tags": dict(self.tags),
        }


class PlaceProvider(Protocol):
    provider_name: str

    async def fetch_nearby(self, origin: Coordinate, radius_m: int) -> List[Place]:
        """
        Returns the named places around `origin`, in the provider's order.
        Raises RemoteServiceError when the remote call fails.
        """
        ...
