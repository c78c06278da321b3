"""
Nominatim search client for the Geocoder Service.
"""

import time
from typing import List, Optional, TYPE_CHECKING

import httpx
from pydantic import ValidationError

from shared.logging import get_logger
from shared.errors import UpstreamUnavailableError, UpstreamMalformedError
from ..models import LocationRecord, load_locations

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


SERVICE_NAME = "nominatim"


class NominatimClient:
    """Client for the Nominatim free-form search endpoint.

    Makes exactly one request per search; there are no retries.
    """

    def __init__(
        self,
        search_url: str,
        *,
        timeout: float = 10.0,
        user_agent: str = "geocoder-proxy/1.0",
        client: Optional[httpx.AsyncClient] = None,
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.search_url = search_url
        self.timeout = timeout
        self.headers = {"User-Agent": user_agent, "Accept": "application/json"}
        self.metrics = metrics
        self.logger = get_logger("geocoder.nominatim_client")
        self.client = client or httpx.AsyncClient()

    async def search(self, query: str) -> List[LocationRecord]:
        """Search locations matching a free-form query."""
        params = {"q": query, "format": "json"}

        start_time = time.time()
        try:
            response = await self.client.get(
                self.search_url,
                params=params,
                headers=self.headers,
                timeout=self.timeout
            )
        except httpx.HTTPError as exc:
            self.logger.error("Nominatim request failed", query=query, error=str(exc))
            raise UpstreamUnavailableError(
                service=SERVICE_NAME,
                message=str(exc) or exc.__class__.__name__,
                details={"error_type": exc.__class__.__name__}
            )
        finally:
            if self.metrics:
                self.metrics.observe_histogram(
                    "upstream_request_duration_seconds",
                    time.time() - start_time,
                    upstream=SERVICE_NAME
                )

        if not response.is_success:
            self.logger.error(
                "Nominatim request returned error status",
                query=query,
                status_code=response.status_code,
                response=response.text
            )
            raise UpstreamUnavailableError(
                service=SERVICE_NAME,
                message=f"Unexpected status {response.status_code}",
                details={"status_code": response.status_code}
            )

        try:
            locations = load_locations(response.content)
        except ValidationError as exc:
            self.logger.error("Malformed Nominatim response", query=query, errors=exc.error_count())
            raise UpstreamMalformedError(
                service=SERVICE_NAME,
                details={"errors": exc.error_count()}
            )

        self.logger.debug("Nominatim search completed", query=query, results=len(locations))
        return locations

    async def close(self):
        """Close the underlying HTTP client."""
        await self.client.aclose()
