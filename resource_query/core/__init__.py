"""Core interfaces, models and errors for resource queries."""

from resource_query.core.errors import (
    ResourceQueryError,
    QueryParseError,
    GeocodingError,
    RepositoryError,
)
from resource_query.core.interfaces import IRepository, IUserRepository, IGeocoder
from resource_query.core.models import (
    ComparisonOp,
    FilterClause,
    GeoConstraint,
    SortDirection,
    SortField,
    PageRequest,
    QueryPlan,
    PageResult,
)

__all__ = [
    "ResourceQueryError",
    "QueryParseError",
    "GeocodingError",
    "RepositoryError",
    "IRepository",
    "IUserRepository",
    "IGeocoder",
    "ComparisonOp",
    "FilterClause",
    "GeoConstraint",
    "SortDirection",
    "SortField",
    "PageRequest",
    "QueryPlan",
    "PageResult",
]
