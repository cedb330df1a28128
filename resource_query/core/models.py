"""
Shared data models for resource queries.

A QueryPlan is built fresh for every request and never mutated afterwards;
all models here are frozen.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

Scalar = Union[bool, int, float, str]

# Earth radius used to express distances as radians of arc on a unit sphere
EARTH_RADIUS_KM = 6378.0

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 5
DEFAULT_RADIUS_KM = 10.0


class ComparisonOp(str, Enum):
    """Comparison operators accepted in filter parameters."""

    eq = "eq"
    gt = "gt"
    gte = "gte"
    lt = "lt"
    lte = "lte"
    in_ = "in"


class SortDirection(str, Enum):
    """Sort order options."""

    asc = "asc"
    desc = "desc"


class FilterClause(BaseModel):
    """A single field comparison. Clauses combine with AND."""

    model_config = ConfigDict(frozen=True)

    field: str
    operator: ComparisonOp = ComparisonOp.eq
    value: Union[Scalar, List[Scalar]]


class GeoConstraint(BaseModel):
    """Circular search region around a geocoded point."""

    model_config = ConfigDict(frozen=True)

    center: Tuple[float, float]  # (longitude, latitude)
    radius: float  # radians
    radius_km: float

    @classmethod
    def from_km(cls, longitude: float, latitude: float, radius_km: float) -> "GeoConstraint":
        """Build a constraint from a radius in kilometers."""
        return cls(
            center=(longitude, latitude),
            radius=radius_km / EARTH_RADIUS_KM,
            radius_km=radius_km,
        )

    @property
    def longitude(self) -> float:
        return self.center[0]

    @property
    def latitude(self) -> float:
        return self.center[1]


class SortField(BaseModel):
    """One entry of a sort specification."""

    model_config = ConfigDict(frozen=True)

    field: str
    direction: SortDirection = SortDirection.asc


class PageRequest(BaseModel):
    """Page number and page size, both 1-based and positive."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def end_index(self) -> int:
        return self.page * self.limit


class QueryPlan(BaseModel):
    """Normalized execution plan produced from raw request parameters."""

    model_config = ConfigDict(frozen=True)

    filters: Tuple[FilterClause, ...] = ()
    geo: Optional[GeoConstraint] = None
    sort: Tuple[SortField, ...] = ()
    projection: Tuple[str, ...] = ()
    page: PageRequest = Field(default_factory=PageRequest)


class PageResult(BaseModel):
    """One page of records plus pagination metadata."""

    model_config = ConfigDict(frozen=True)

    items: List[Dict[str, Any]] = Field(default_factory=list)
    total_count: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    has_next: bool = False
    has_prev: bool = False
    next_page: Optional[int] = None
    prev_page: Optional[int] = None

    @property
    def count(self) -> int:
        return len(self.items)
