"""
Upstream adapters for the Geocoder Service.

Wraps the public geocoding API behind a small client that maps transport
failures and malformed bodies onto the shared error types.
"""

from .nominatim_client import NominatimClient

__all__ = ["NominatimClient"]
