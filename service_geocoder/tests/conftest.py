"""
Shared fixtures for Geocoder service tests.
"""

from typing import Dict, List, Optional, Tuple

import pytest

from shared.errors import CacheUnavailableError, CacheWriteError
from service_geocoder.app.models import LocationRecord


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class InMemoryStore:
    """Cache store double with TTL expiry driven by a FakeClock."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.entries: Dict[str, Tuple[bytes, float]] = {}
        self.writes: List[Tuple[str, bytes, int]] = []
        self.read_error: Optional[Exception] = None
        self.write_error: Optional[Exception] = None
        self.start_error: Optional[Exception] = None
        self.started = False
        self.stopped = False

    async def get(self, key: str) -> Optional[bytes]:
        if self.read_error:
            raise self.read_error
        entry = self.entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self.clock() >= expires_at:
            del self.entries[key]
            return None
        return value

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        if self.write_error:
            raise self.write_error
        self.writes.append((key, value, ttl_seconds))
        self.entries[key] = (value, self.clock() + ttl_seconds)

    async def start(self):
        if self.start_error:
            raise self.start_error
        self.started = True

    async def stop(self):
        self.stopped = True

    async def health_check(self) -> bool:
        return self.read_error is None


class StubUpstream:
    """Upstream double returning canned locations or raising an error."""

    def __init__(self, locations: Optional[List[LocationRecord]] = None):
        self.locations = locations or []
        self.error: Optional[Exception] = None
        self.queries: List[str] = []
        self.closed = False

    async def search(self, query: str) -> List[LocationRecord]:
        self.queries.append(query)
        if self.error:
            raise self.error
        return list(self.locations)

    async def close(self):
        self.closed = True


@pytest.fixture
def paris_payload():
    """Raw Nominatim record for Paris."""
    return {
        "place_id": 1,
        "licence": "Data © OpenStreetMap contributors, ODbL 1.0. https://osm.org/copyright",
        "osm_type": "relation",
        "osm_id": 7444,
        "boundingbox": ["48.8155755", "48.902156", "2.224122", "2.4697602"],
        "lat": "48.85",
        "lon": "2.35",
        "display_name": "Paris, France",
        "class": "boundary",
        "type": "administrative",
        "importance": 0.9654895765402,
        "icon": "https://nominatim.openstreetmap.org/ui/mapicons/poi_boundary_administrative.p.20.png"
    }


@pytest.fixture
def paris_record(paris_payload):
    """Parsed Paris location."""
    return LocationRecord.model_validate(paris_payload)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return InMemoryStore(clock)


@pytest.fixture
def upstream(paris_record):
    return StubUpstream([paris_record])


@pytest.fixture
def unavailable_error():
    return CacheUnavailableError("Connection refused")


@pytest.fixture
def write_error():
    return CacheWriteError("READONLY You can't write against a read only replica.")
