"""
MongoDB query translator.

Converts the parts of a QueryPlan into pymongo find() arguments.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from pymongo import ASCENDING, DESCENDING

from resource_query.core.models import (
    FilterClause,
    GeoConstraint,
    SortDirection,
    SortField,
)

LOCATION_FIELD = "location"


class MongoQueryTranslator:
    """
    Translates filter clauses, geo constraints, projections and sort fields
    to MongoDB query documents.
    """

    def __init__(self, location_field: str = LOCATION_FIELD):
        """
        Initialize MongoDB query translator.

        Args:
            location_field: Field holding the GeoJSON point on stored records
        """
        self.location_field = location_field

    def translate_filters(
        self, filters: Sequence[FilterClause], geo: Optional[GeoConstraint] = None
    ) -> Dict[str, Any]:
        """
        Build a find() filter document.

        Clauses on the same field are merged into one operator document, so
        ``hourlyRate > 10 AND hourlyRate < 30`` becomes
        ``{"hourlyRate": {"$gt": 10, "$lt": 30}}``.
        """
        by_field: Dict[str, Dict[str, Any]] = {}
        for clause in filters:
            by_field.setdefault(clause.field, {})[f"${clause.operator.value}"] = clause.value

        query: Dict[str, Any] = {}
        for field, operators in by_field.items():
            if list(operators) == ["$eq"]:
                query[field] = operators["$eq"]
            else:
                query[field] = operators

        if geo is not None:
            query[self.location_field] = self._translate_geo(geo)

        return query

    def _translate_geo(self, geo: GeoConstraint) -> Dict[str, Any]:
        return {
            "$geoWithin": {
                "$centerSphere": [[geo.longitude, geo.latitude], geo.radius],
            }
        }

    @staticmethod
    def translate_projection(projection: Sequence[str]) -> Optional[Dict[str, int]]:
        """Build a projection document; None means all fields."""
        if not projection:
            return None
        return {field: 1 for field in projection}

    @staticmethod
    def translate_sort(sort: Sequence[SortField]) -> List[Tuple[str, int]]:
        """Build a pymongo sort list."""
        return [
            (s.field, ASCENDING if s.direction is SortDirection.asc else DESCENDING)
            for s in sort
        ]
