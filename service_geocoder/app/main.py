"""
Geocoder service: caching proxy for the Nominatim search API.
"""

from typing import List, Optional

from fastapi import Query

from shared.base_service import BaseService
from shared.config import ServiceConfig

from .cache.redis_cache import RedisCache
from .upstream.nominatim_client import NominatimClient
from .resolver import CacheAsideResolver
from .models import SearchResponse


class GeocoderService(BaseService):
    """Geocoder service implementation."""

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        cache: Optional[RedisCache] = None,
        upstream: Optional[NominatimClient] = None,
    ):
        super().__init__("geocoder", config)

        self.cache = cache or RedisCache(
            self.config.redis_url,
            password=self.config.redis_password
        )
        self.upstream = upstream or NominatimClient(
            self.config.nominatim_url,
            timeout=self.config.upstream_timeout_seconds,
            user_agent=self.config.user_agent,
            metrics=self.metrics
        )
        self.resolver = CacheAsideResolver(
            self.cache,
            self.upstream,
            ttl_seconds=self.config.cache_ttl_seconds,
            metrics=self.metrics
        )

        self._setup_geocoder_routes()

    def _setup_geocoder_routes(self):
        """Set up geocoder-specific routes."""

        @self.app.get("/", response_model=SearchResponse)
        async def search_locations(
            search: List[str] = Query([""], description="Free-form geocoding query")
        ):
            """Search locations, serving repeated queries from cache.

            When the parameter is repeated only the first value is used.
            """
            query = search[0]
            self.logger.info("Search request", query=query)

            result = await self.resolver.get_locations(query)

            return SearchResponse(cache=result.cache_hit, data=result.locations)

    async def _check_dependencies(self):
        """Check geocoder service dependencies."""
        dependencies = {}

        try:
            if await self.cache.health_check():
                dependencies["redis"] = "ok"
            else:
                dependencies["redis"] = "error"
        except Exception:
            dependencies["redis"] = "error"

        return dependencies

    async def start(self):
        """Start geocoder service components."""
        try:
            await self.cache.start()
        except Exception:
            # stop() is not called when startup fails
            await self.upstream.close()
            await self.cache.stop()
            raise

        self.logger.info(
            "Geocoder service started",
            port=self.config.port,
            cache_ttl_seconds=self.config.cache_ttl_seconds
        )

    async def stop(self):
        """Stop geocoder service components."""
        await self.upstream.close()
        await self.cache.stop()

        self.logger.info("Geocoder service stopped")


def create_app():
    """Create geocoder service application."""
    service = GeocoderService()
    return service.app


def main():
    GeocoderService().run()


if __name__ == "__main__":
    main()
