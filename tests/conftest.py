import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure the repo root is on sys.path for direct pytest runs
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from listy.providers.base import Coordinate, Place  # noqa: E402


def element(el_id, lat=19.4326, lon=-99.1332, **tags):
    out = {"type": "node", "id": el_id, "lat": lat, "lon": lon}
    if tags:
        out["tags"] = tags
    return out


def make_place(place_id, lat=19.4326, lon=-99.1332, **tags):
    tags.setdefault("name", f"Place {place_id}")
    return Place(id=str(place_id), coordinate=Coordinate(lat, lon), tags=tags)


class FakeClock:
    def __init__(self, start=None):
        self.now = start or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, delta):
        self.now = self.now + delta


@pytest.fixture
def clock():
    return FakeClock()
