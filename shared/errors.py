"""
Shared error handling for the Geocoder Proxy.
"""

from typing import Dict, Any, Optional

from opentelemetry import trace
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class GeocoderProxyException(Exception):
    """Base exception for Geocoder Proxy services."""

    status_code = 500

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        trace_id = None
        current_span = trace.get_current_span()
        if current_span and current_span.is_recording():
            span_context = current_span.get_span_context()
            if span_context.trace_id != 0:
                trace_id = f"{span_context.trace_id:032x}"

        return ErrorResponse(
            trace_id=trace_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class CacheUnavailableError(GeocoderProxyException):
    """Cache lookup failed for a reason other than a missing key."""

    status_code = 503

    def __init__(self, message: str = "Cache unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__("CACHE_UNAVAILABLE", message, details)


class CacheCorruptError(GeocoderProxyException):
    """A stored cache value could not be deserialized."""

    status_code = 500

    def __init__(self, message: str = "Cached value is corrupt", details: Optional[Dict[str, Any]] = None):
        super().__init__("CACHE_CORRUPT", message, details)


class CacheWriteError(GeocoderProxyException):
    """Writing a fetched result into the cache failed."""

    status_code = 500

    def __init__(self, message: str = "Cache write failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("CACHE_WRITE_FAILED", message, details)


class UpstreamUnavailableError(GeocoderProxyException):
    """The upstream geocoding request failed."""

    status_code = 502

    def __init__(self, service: str, message: str = "Upstream unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__("UPSTREAM_UNAVAILABLE", f"{service}: {message}", details)


class UpstreamMalformedError(GeocoderProxyException):
    """The upstream response body did not match the expected record shape."""

    status_code = 502

    def __init__(self, service: str, message: str = "Malformed upstream response", details: Optional[Dict[str, Any]] = None):
        super().__init__("UPSTREAM_MALFORMED", f"{service}: {message}", details)
