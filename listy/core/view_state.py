from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ListState(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    RESULTS = "results"
    UNAVAILABLE = "unavailable"


DEFAULT_ERROR_MESSAGE = "Error al cargar restaurantes."
EMPTY_MESSAGE = "No se encontraron lugares cerca."
LOCATING_MESSAGE = "Solicitando ubicación..."
NO_LOCATION_MESSAGE = "Sin ubicación no podemos buscar lugares cercanos."


@dataclass(frozen=True)
class StatusView:
    state: ListState
    label: str
    message: str = ""
    retry_available: bool = False


@dataclass(frozen=True)
class LocationStatus:
    text: str
    is_error: bool = False


def render_status(state: ListState, count: int = 0, message: str = "") -> StatusView:
    """Label/message for the results panel; no rendering surface involved."""
    if state == ListState.LOADING:
        return StatusView(state, "Buscando...")
    if state == ListState.ERROR:
        return StatusView(state, "Error", message or DEFAULT_ERROR_MESSAGE, retry_available=True)
    if state == ListState.EMPTY:
        return StatusView(state, "0 encontrados", EMPTY_MESSAGE)
    if state == ListState.UNAVAILABLE:
        # location could not be acquired; retrying the search cannot help
        return StatusView(state, "Sin ubicación", message or NO_LOCATION_MESSAGE)
    return StatusView(state, f"{count} encontrados")


def place_icon(amenity: Optional[str]) -> Tuple[str, str]:
    """(icon class, color class) for a marker of the given amenity."""
    if amenity == "cafe":
        return "fa-mug-hot", "text-emerald-400"
    if amenity in ("bar", "pub"):
        return "fa-wine-glass", "text-purple-400"
    if amenity == "fast_food":
        return "fa-burger", "text-yellow-400"
    return "fa-utensils", "text-orange-500"
