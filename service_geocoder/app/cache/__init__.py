"""
Cache package for the Geocoder Service.

Provides a Redis-backed byte store keyed by normalized search queries.
Entries carry a short TTL and Redis expires them natively.
"""

from .redis_cache import RedisCache

__all__ = ["RedisCache"]
