"""
Cache-aside resolution of geocoding queries.
"""

from typing import List, Optional, Protocol, TYPE_CHECKING

from pydantic import ValidationError

from shared.logging import get_logger
from shared.errors import CacheCorruptError, CacheWriteError
from shared.tracing import get_tracer
from .keys import normalize
from .models import LocationRecord, ResolutionResult, dump_locations, load_locations

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


DEFAULT_CACHE_TTL_SECONDS = 15

CACHE_TYPE = "geocode"


class CacheStore(Protocol):
    """Byte store with TTL; get returns None for a missing key."""

    async def get(self, key: str) -> Optional[bytes]: ...

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None: ...


class LocationSearcher(Protocol):
    """Upstream geocoder."""

    async def search(self, query: str) -> List[LocationRecord]: ...


class CacheAsideResolver:
    """Serve geocoding results from cache, falling back to the upstream geocoder.

    A lookup either hits and returns the stored records, or misses, queries
    upstream once, stores the records with a fixed TTL and returns them.
    Store read errors and corrupt entries are raised without contacting
    upstream; a failed store write is logged and the fetched records are
    returned uncached. The resolver keeps no per-request state, so one
    instance serves concurrent requests. Two concurrent misses for the same
    key both write, and the last write wins.
    """

    def __init__(
        self,
        store: CacheStore,
        upstream: LocationSearcher,
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.store = store
        self.upstream = upstream
        self.ttl_seconds = ttl_seconds
        self.metrics = metrics
        self.logger = get_logger("geocoder.resolver")
        self.tracer = get_tracer("geocoder.resolver")

    async def get_locations(self, query: str) -> ResolutionResult:
        """Resolve a raw search query."""
        return await self.resolve(normalize(query), query)

    async def resolve(self, key: str, query: str) -> ResolutionResult:
        """Resolve a query whose cache key has already been derived."""
        with self.tracer.start_as_current_span("geocoder.resolve") as span:
            span.set_attribute("geocoder.cache_key", key)

            cached = await self.store.get(key)
            span.set_attribute("geocoder.cache_hit", cached is not None)

            if cached is None:
                return await self._resolve_miss(key, query)
            return self._resolve_hit(key, cached)

    async def _resolve_miss(self, key: str, query: str) -> ResolutionResult:
        self.logger.info("Cache miss, querying upstream", cache_key=key)
        if self.metrics:
            self.metrics.increment_counter("cache_misses_total", cache_type=CACHE_TYPE)

        locations = await self.upstream.search(query)

        try:
            await self.store.set(key, dump_locations(locations), self.ttl_seconds)
        except CacheWriteError as e:
            self.logger.warning("Returning uncached result", cache_key=key, error=e.message)
            if self.metrics:
                self.metrics.increment_counter("cache_write_failures_total", cache_type=CACHE_TYPE)

        return ResolutionResult(locations=locations, cache_hit=False)

    def _resolve_hit(self, key: str, cached: bytes) -> ResolutionResult:
        try:
            locations = load_locations(cached)
        except ValidationError as e:
            self.logger.error("Cached value could not be decoded", cache_key=key, errors=e.error_count())
            raise CacheCorruptError(details={"cache_key": key}) from e

        self.logger.info("Cache hit", cache_key=key, results=len(locations))
        if self.metrics:
            self.metrics.increment_counter("cache_hits_total", cache_type=CACHE_TYPE)

        return ResolutionResult(locations=locations, cache_hit=True)
