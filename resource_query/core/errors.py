"""
Error types raised by the resource query system.

Callers map each kind to a transport-level response; the translator itself
never catches or rewrites them.
"""


class ResourceQueryError(Exception):
    """Base class for all resource query errors."""


class QueryParseError(ResourceQueryError):
    """Raised when filter, sort or select parameters cannot be interpreted."""


class GeocodingError(ResourceQueryError):
    """Raised when a place name cannot be resolved to coordinates."""


class RepositoryError(ResourceQueryError):
    """Raised when the storage backend fails to count or fetch records."""
