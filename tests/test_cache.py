import json
import math
from datetime import datetime, timedelta, timezone

import pytest

from conftest import make_place
from listy.core.cache import CacheEntry, InMemorySessionStore, SpatialTemporalCache
from listy.core.distance import EARTH_RADIUS_KM
from listy.providers.base import Coordinate

ORIGIN = Coordinate(19.4326, -99.1332)
T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def north_of(origin, meters):
    return Coordinate(origin.latitude + (meters / 1000.0) / (EARTH_RADIUS_KM * math.pi / 180), origin.longitude)


@pytest.fixture
def cache():
    c = SpatialTemporalCache(InMemorySessionStore())
    c.store(ORIGIN, T0, [make_place(1), make_place(2, amenity="cafe")])
    return c


def test_hit_just_before_expiry_and_within_drift(cache):
    hit = cache.lookup(north_of(ORIGIN, 99), T0 + timedelta(minutes=9, seconds=59))
    assert hit is not None
    assert [p.id for p in hit] == ["1", "2"]


def test_miss_after_ten_minutes(cache):
    assert cache.lookup(ORIGIN, T0 + timedelta(minutes=10, seconds=1)) is None


def test_miss_when_moved_too_far(cache):
    assert cache.lookup(north_of(ORIGIN, 101), T0 + timedelta(seconds=1)) is None


def test_miss_without_entry():
    assert SpatialTemporalCache(InMemorySessionStore()).lookup(ORIGIN, T0) is None


def test_valid_empty_entry_is_a_hit():
    c = SpatialTemporalCache(InMemorySessionStore())
    c.store(ORIGIN, T0, [])
    assert c.lookup(ORIGIN, T0 + timedelta(minutes=1)) == []


def test_store_replaces_previous_entry(cache):
    elsewhere = Coordinate(40.4168, -3.7038)
    cache.store(elsewhere, T0, [make_place(9)])
    assert cache.lookup(ORIGIN, T0) is None
    assert [p.id for p in cache.lookup(elsewhere, T0)] == ["9"]


def test_lookup_returns_unselected_copies(cache):
    first = cache.lookup(ORIGIN, T0)
    first[0].selected = True
    first[0].tags["name"] = "changed"
    second = cache.lookup(ORIGIN, T0)
    assert second[0].selected is False
    assert second[0].tags["name"] == "Place 1"


def test_serialized_form_uses_session_keys():
    store = InMemorySessionStore()
    SpatialTemporalCache(store).store(ORIGIN, T0, [make_place(7)])
    payload = json.loads(store.get("listy_cache"))
    assert set(payload) == {"lat", "lng", "data", "timestamp"}
    assert payload["timestamp"] == int(T0.timestamp() * 1000)
    assert payload["data"][0]["id"] == "7"


def test_unreadable_entry_is_a_miss():
    store = InMemorySessionStore()
    store.set("listy_cache", "{not json")
    assert SpatialTemporalCache(store).lookup(ORIGIN, T0) is None
    store.set("listy_cache", json.dumps({"lat": 1.0}))
    assert SpatialTemporalCache(store).lookup(ORIGIN, T0) is None


def test_entry_validity_is_independent_of_storage():
    entry = CacheEntry(origin=ORIGIN, captured_at=T0, places=())
    assert entry.is_valid_for(ORIGIN, T0 + timedelta(minutes=5), timedelta(minutes=10), 0.1)
    assert not entry.is_valid_for(ORIGIN, T0 + timedelta(minutes=10), timedelta(minutes=10), 0.1)


def test_clear_drops_entry(cache):
    cache.clear()
    assert cache.lookup(ORIGIN, T0) is None
