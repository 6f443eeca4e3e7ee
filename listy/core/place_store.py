from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..providers.base import Place


class PlaceStore:
    """The places currently on display, indexed by id in result order."""

    def __init__(self, places: Iterable[Place] = ()):
        self._by_id: Dict[str, Place] = {}
        self.replace(places)

    def replace(self, places: Iterable[Place]) -> None:
        snapshot: Dict[str, Place] = {}
        for p in places:
            if p.id in snapshot:
                raise ValueError(f"duplicate place id {p.id!r}")
            snapshot[p.id] = p
        self._by_id = snapshot

    def get(self, place_id: str) -> Optional[Place]:
        return self._by_id.get(str(place_id))

    def all(self) -> List[Place]:
        return list(self._by_id.values())

    def ids(self) -> List[str]:
        return list(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)
