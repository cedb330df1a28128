"""
Query translation and execution.

Turns raw request parameters into a QueryPlan and runs the plan against a
repository to produce one page of results.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Collection, Mapping, Optional, Tuple

from resource_query.core.errors import QueryParseError
from resource_query.core.interfaces import IGeocoder, IRepository
from resource_query.core.models import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    DEFAULT_RADIUS_KM,
    GeoConstraint,
    PageRequest,
    PageResult,
    QueryPlan,
    SortDirection,
    SortField,
)
from resource_query.query.filter_parser import parse_filters, validate_field_name

logger = logging.getLogger(__name__)

SELECT_KEY = "select"
SORT_KEY = "sort"
PAGE_KEY = "page"
LIMIT_KEY = "limit"
LOCATION_KEY = "city"
RADIUS_KEY = "radius"

BASE_RESERVED_KEYS = frozenset({SELECT_KEY, SORT_KEY, PAGE_KEY, LIMIT_KEY})
GEO_RESERVED_KEYS = frozenset({LOCATION_KEY, RADIUS_KEY})

DEFAULT_SORT_FIELD = "date"

# Largest skip/limit MongoDB can encode (signed 8-byte int)
MAX_QUERY_INT = 2**63 - 1


def _positive_int(value: Any, default: int) -> int:
    """Parse a positive integer, falling back to default for anything else."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if 0 < parsed <= MAX_QUERY_INT else default


def _page_request(page_value: Any, limit_value: Any) -> PageRequest:
    """Parse paging parameters; values whose skip would overflow fall back to defaults."""
    page = _positive_int(page_value, DEFAULT_PAGE)
    limit = _positive_int(limit_value, DEFAULT_LIMIT)
    if page * limit > MAX_QUERY_INT:
        page = DEFAULT_PAGE
    return PageRequest(page=page, limit=limit)


def _split_fields(value: Any, key: str) -> Tuple[str, ...]:
    if not isinstance(value, str):
        raise QueryParseError(f"'{key}' must be a comma-separated string")

    fields = tuple(part.strip() for part in value.split(","))
    if any(not field for field in fields):
        raise QueryParseError(f"Empty field name in '{key}'")
    return fields


class QueryTranslator:
    """
    Translates raw request parameters into query plans and executes them.

    The translator is stateless between calls; the geocoder it is given is
    only consulted when a location parameter is reserved for the call.
    """

    def __init__(
        self,
        geocoder: Optional[IGeocoder] = None,
        default_radius_km: float = DEFAULT_RADIUS_KM,
        default_sort_field: str = DEFAULT_SORT_FIELD,
        location_key: str = LOCATION_KEY,
        radius_key: str = RADIUS_KEY,
        string_fields: Collection[str] = (),
    ):
        """
        Initialize query translator.

        Args:
            geocoder: Resolves location names; geo search is disabled without one
            default_radius_km: Radius used when the request gives none
            default_sort_field: Creation-time field sorted descending by default
            location_key: Parameter naming the place to search around
            radius_key: Parameter giving the search radius in kilometers
            string_fields: Fields stored as strings, never coerced to numbers
        """
        self.geocoder = geocoder
        self.default_radius_km = default_radius_km
        self.default_sort_field = default_sort_field
        self.location_key = location_key
        self.radius_key = radius_key
        self.string_fields = frozenset(string_fields)

    def parse(
        self,
        raw: Mapping[str, Any],
        reserved_keys: Collection[str] = BASE_RESERVED_KEYS,
    ) -> QueryPlan:
        """
        Build a query plan from raw request parameters.

        Args:
            raw: RawParameters from the request query string
            reserved_keys: Parameter names that are not filters for this resource

        Returns:
            Immutable QueryPlan

        Raises:
            QueryParseError: If filter, select, sort or radius syntax is malformed
            GeocodingError: If the location cannot be resolved
        """
        reserved = {key: value for key, value in raw.items() if key in reserved_keys}
        filter_params = {key: value for key, value in raw.items() if key not in reserved_keys}

        plan = QueryPlan(
            filters=tuple(parse_filters(filter_params, self.string_fields)),
            geo=self._parse_geo(reserved, reserved_keys),
            sort=self._parse_sort(reserved.get(SORT_KEY)),
            projection=self._parse_projection(reserved.get(SELECT_KEY)),
            page=_page_request(reserved.get(PAGE_KEY), reserved.get(LIMIT_KEY)),
        )
        logger.debug("Parsed query plan: %s", plan)
        return plan

    def execute(self, plan: QueryPlan, repository: IRepository) -> PageResult:
        """
        Run a plan against a repository.

        The total count and the page fetch are independent reads and run
        concurrently. Either failing fails the whole call.

        Args:
            plan: Plan produced by parse()
            repository: Repository for the resource type

        Returns:
            One page of records with pagination metadata
        """
        page = plan.page

        with ThreadPoolExecutor(max_workers=2) as pool:
            count_future = pool.submit(repository.count)
            items_future = pool.submit(
                repository.find,
                plan.filters,
                plan.geo,
                plan.projection,
                plan.sort,
                page.skip,
                page.limit,
            )
            total_count = count_future.result()
            items = items_future.result()

        has_next = page.end_index < total_count
        has_prev = page.skip > 0

        return PageResult(
            items=list(items)[: page.limit],
            total_count=total_count,
            page=page.page,
            limit=page.limit,
            has_next=has_next,
            has_prev=has_prev,
            next_page=page.page + 1 if has_next else None,
            prev_page=page.page - 1 if has_prev else None,
        )

    def _parse_projection(self, value: Any) -> Tuple[str, ...]:
        if value is None or value == "":
            return ()
        return tuple(validate_field_name(f, SELECT_KEY) for f in _split_fields(value, SELECT_KEY))

    def _parse_sort(self, value: Any) -> Tuple[SortField, ...]:
        if value is None or value == "":
            return (SortField(field=self.default_sort_field, direction=SortDirection.desc),)

        sort_fields = []
        for token in _split_fields(value, SORT_KEY):
            if token.startswith("-"):
                name, direction = token[1:], SortDirection.desc
            else:
                name, direction = token, SortDirection.asc
            field = validate_field_name(name, SORT_KEY)
            sort_fields.append(SortField(field=field, direction=direction))
        return tuple(sort_fields)

    def _parse_geo(
        self, reserved: Mapping[str, Any], reserved_keys: Collection[str]
    ) -> Optional[GeoConstraint]:
        if self.geocoder is None or self.location_key not in reserved_keys:
            return None

        place = reserved.get(self.location_key)
        if place is None:
            return None
        if not isinstance(place, str) or not place.strip():
            raise QueryParseError(f"'{self.location_key}' must be a non-empty string")

        radius_km = self._parse_radius(reserved.get(self.radius_key))

        longitude, latitude = self.geocoder.resolve(place.strip())
        logger.info(
            "Geocoded '%s' to (%s, %s), radius %s km", place, longitude, latitude, radius_km
        )
        return GeoConstraint.from_km(longitude, latitude, radius_km)

    def _parse_radius(self, value: Any) -> float:
        if value is None:
            return self.default_radius_km
        try:
            radius_km = float(value)
        except (TypeError, ValueError):
            raise QueryParseError(f"'{self.radius_key}' must be a number of kilometers")
        if not math.isfinite(radius_km) or radius_km <= 0:
            raise QueryParseError(f"'{self.radius_key}' must be positive")
        return radius_km
