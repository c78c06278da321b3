"""
Cache key derivation for geocoding queries.
"""

from urllib.parse import quote

# Characters a URL path segment may carry unescaped besides letters, digits and "-_.~"
PATH_SEGMENT_SAFE = "$&+,;=:@"


def normalize(query: str) -> str:
    """Derive the cache key for a raw search query.

    The key is the query escaped as a single URL path segment: "/" and "?"
    are escaped, spaces become "%20" and non-ASCII text is percent-encoded
    as UTF-8. The same query always yields the same key.
    """
    return quote(query, safe=PATH_SEGMENT_SAFE)
