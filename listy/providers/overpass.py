# listy/providers/overpass.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

import httpx

from ..core.config import settings
from ..core.errors import RemoteServiceError
from .base import Coordinate, Place

logger = logging.getLogger(__name__)

AMENITIES: Tuple[str, ...] = ("fast_food", "restaurant", "cafe", "bar", "pub")


def build_query(origin: Coordinate, radius_m: int, amenities: Iterable[str] = AMENITIES) -> str:
    """Overpass QL for named-or-not amenity nodes within `radius_m` of `origin`."""
    pattern = "|".join(amenities)
    return (
        "[out:json][timeout:25];\n"
        "(\n"
        f'  node["amenity"~"{pattern}"](around:{int(radius_m)},{origin.latitude},{origin.longitude});\n'
        ");\n"
        "out body;\n"
        ">;\n"
        "out skel qt;\n"
    )


def _element_coordinate(el: Dict[str, Any]) -> Optional[Coordinate]:
    lat = el.get("lat")
    lon = el.get("lon")
    if isinstance(lat, bool) or isinstance(lon, bool):
        return None
    if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
        return None
    try:
        return Coordinate(latitude=float(lat), longitude=float(lon))
    except ValueError:
        return None


def normalize_elements(elements: Iterable[Dict[str, Any]]) -> List[Place]:
    """
    Turns raw Overpass elements into Places, keeping the remote order.
    Elements without a name tag are dropped, as are elements without a usable
    position and repeats of an id already seen.
    """
    seen = set()
    places: List[Place] = []
    for el in elements:
        if not isinstance(el, dict):
            continue
        tags = el.get("tags") or {}
        if not isinstance(tags, dict) or not tags.get("name"):
            continue
        raw_id = el.get("id")
        if raw_id is None:
            continue
        place_id = str(raw_id)
        if place_id in seen:
            continue
        coord = _element_coordinate(el)
        if coord is None:
            continue
        seen.add(place_id)
        places.append(
            Place(
                id=place_id,
                coordinate=coord,
                tags={str(k): str(v) for k, v in tags.items()},
            )
        )
    return places


@dataclass(frozen=True)
class OverpassConfig:
    api_url: str = settings.overpass_api_url
    timeout_s: float = settings.http_timeout_s
    amenities: Tuple[str, ...] = AMENITIES


class OverpassProvider:
    """
    OpenStreetMap Overpass API provider:
      - POST <api_url> with the Overpass QL query as the raw request body

    One request per call; failures surface as RemoteServiceError and are never retried here.
    """

    provider_name = "overpass"

    def __init__(self, cfg: Optional[OverpassConfig] = None, client: Optional[httpx.AsyncClient] = None):
        self.cfg = cfg or OverpassConfig()
        if not self.cfg.api_url:
            raise ValueError("OverpassConfig.api_url is required")
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self):
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.cfg.timeout_s)
            self._owns_client = True
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("OverpassProvider must be used with 'async with' or provide a client.")
        return self._client

    async def _post_query(self, query: str) -> Dict[str, Any]:
        try:
            resp = await self.client.post(
                self.cfg.api_url,
                content=query.encode("utf-8"),
                headers={"Content-Type": "text/plain; charset=utf-8"},
            )
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"Overpass request failed: {e}") from e

        if not resp.is_success:
            raise RemoteServiceError(f"Overpass API error (status {resp.status_code})", status_code=resp.status_code)
        try:
            data = resp.json()
        except ValueError as e:
            raise RemoteServiceError("Overpass returned a non-JSON body", status_code=resp.status_code) from e
        if not isinstance(data, dict):
            raise RemoteServiceError("Expected JSON object response", status_code=resp.status_code)
        return data

    async def fetch_nearby(self, origin: Coordinate, radius_m: int = settings.search_radius_m) -> List[Place]:
        query = build_query(origin, radius_m, self.cfg.amenities)
        data = await self._post_query(query)
        elements = data.get("elements", []) or []
        places = normalize_elements(elements)
        logger.info(
            "overpass fetch lat=%.6f lng=%.6f radius_m=%d: %d elements, %d named places",
            origin.latitude,
            origin.longitude,
            radius_m,
            len(elements),
            len(places),
        )
        return places
