"""Query parsing and translation components."""

from resource_query.query.filter_parser import coerce_scalar, parse_filters
from resource_query.query.params import nest_query_params
from resource_query.query.translator import (
    BASE_RESERVED_KEYS,
    GEO_RESERVED_KEYS,
    QueryTranslator,
)

__all__ = [
    "coerce_scalar",
    "parse_filters",
    "nest_query_params",
    "BASE_RESERVED_KEYS",
    "GEO_RESERVED_KEYS",
    "QueryTranslator",
]
