"""
Geocoder Service package.

An HTTP proxy in front of the public Nominatim search API that keeps
responses in Redis for a short TTL. It provides:

- app.main: API surface (search, health, metrics).
- app.keys: Deterministic cache key derivation from search queries.
- app.resolver: Cache-aside lookup-or-fetch logic.
- app.cache: Redis-backed byte store.
- app.upstream: Nominatim HTTP client.

Guidelines:
- The service is stateless; Redis is the only shared state.
- The cache is an optimization; a failed write never fails a request.
- No retries: every failure surfaces once with a distinct error code.
"""
