"""In-memory repository and geocoder fakes."""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from resource_query.core.errors import GeocodingError
from resource_query.core.models import FilterClause, GeoConstraint, SortField


class FakeRepository:
    """Records find() arguments and serves a fixed record list."""

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None, total: Optional[int] = None):
        self.records = records or []
        self.total = len(self.records) if total is None else total
        self.find_calls: List[Dict[str, Any]] = []
        self.by_user: Dict[str, Dict[str, Any]] = {}

    def count(self) -> int:
        return self.total

    def find(
        self,
        filters: Sequence[FilterClause],
        geo: Optional[GeoConstraint],
        projection: Sequence[str],
        sort: Sequence[SortField],
        skip: int,
        limit: int,
    ) -> List[Dict[str, Any]]:
        self.find_calls.append(
            {
                "filters": filters,
                "geo": geo,
                "projection": projection,
                "sort": sort,
                "skip": skip,
                "limit": limit,
            }
        )
        return self.records[skip : skip + limit]

    def find_by_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self.by_user.get(user_id)


class FakeGeocoder:
    """Resolves from a fixed table; unknown places fail."""

    def __init__(self, places: Optional[Dict[str, Tuple[float, float]]] = None):
        self.places = places or {"Austin": (-97.7, 30.3)}
        self.calls: List[str] = []

    def resolve(self, place_name: str) -> Tuple[float, float]:
        self.calls.append(place_name)
        if place_name not in self.places:
            raise GeocodingError(f"No location found for '{place_name}'")
        return self.places[place_name]


def make_records(n: int) -> List[Dict[str, Any]]:
    return [{"_id": str(i), "hourlyRate": 10 + i} for i in range(n)]
