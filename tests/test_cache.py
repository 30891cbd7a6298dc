from __future__ import annotations

import pytest

from route_engine.services.cache import RouteCache, route_cache_key
from route_engine.services.types import GeoPoint, Location, TravelMode


def _location(latitude: float, longitude: float) -> Location:
    return Location(name="Somewhere", coordinates=GeoPoint(latitude=latitude, longitude=longitude))


def test_put_then_get_returns_same_value(clock) -> None:
    cache: RouteCache[str] = RouteCache(max_size=10, default_ttl=60, clock=clock)
    cache.put("a", "result")

    assert cache.get("a") == "result"
    assert cache.get("missing") is None


def test_entry_expires_after_ttl(clock) -> None:
    cache: RouteCache[str] = RouteCache(max_size=10, default_ttl=60, clock=clock)
    cache.put("a", "result")

    clock.advance(60)
    assert cache.get("a") == "result"

    clock.advance(1)
    assert cache.get("a") is None
    assert cache.stats()["size"] == 0


def test_clear_expired_removes_only_stale_entries(clock) -> None:
    cache: RouteCache[str] = RouteCache(max_size=10, default_ttl=60, clock=clock)
    cache.put("old", "stale")
    clock.advance(30)
    cache.put("new", "fresh")
    cache.put("long", "lived", ttl=600)

    clock.advance(45)
    removed = cache.clear_expired()

    assert removed == 1
    assert cache.get("old") is None
    assert cache.get("new") == "fresh"
    assert cache.get("long") == "lived"


def test_eviction_keeps_size_bounded_and_drops_least_recent(clock) -> None:
    cache: RouteCache[int] = RouteCache(max_size=2, default_ttl=60, clock=clock)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.get("a")
    cache.put("c", 3)

    assert cache.stats() == {"size": 2, "max_size": 2}
    assert cache.get("b") is None
    assert cache.get("a") == 1
    assert cache.get("c") == 3


def test_overwriting_existing_key_does_not_evict(clock) -> None:
    cache: RouteCache[int] = RouteCache(max_size=2, default_ttl=60, clock=clock)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.put("a", 10)

    assert len(cache) == 2
    assert cache.get("a") == 10
    assert cache.get("b") == 2


def test_max_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        RouteCache(max_size=0)


def test_cache_key_rounds_coordinates_to_four_decimals() -> None:
    source = _location(40.71281, -74.00601)
    near_source = _location(40.71279, -74.00598)
    destination = _location(42.3601, -71.0589)

    key = route_cache_key(source, destination, TravelMode.DRIVING, None)

    assert key.startswith("route:")
    assert key == route_cache_key(near_source, destination, TravelMode.DRIVING, None)
    assert key != route_cache_key(source, destination, TravelMode.WALKING, None)
    assert key != route_cache_key(source, destination, TravelMode.DRIVING, 80.0)
    assert key != route_cache_key(destination, source, TravelMode.DRIVING, None)
