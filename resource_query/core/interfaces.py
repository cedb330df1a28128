"""
Abstract interfaces for storage and geocoding collaborators.

These protocols define the narrow contract the query translator relies on.
Neither knows anything about HTTP or a specific database driver.
"""

from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from resource_query.core.models import FilterClause, GeoConstraint, SortField


class IRepository(Protocol):
    """
    Read access to the records of one resource type.

    Implementations raise RepositoryError for storage failures.
    """

    def count(self) -> int:
        """
        Count all records of the resource type.

        Returns:
            Total number of stored records, ignoring any filter
        """
        ...

    def find(
        self,
        filters: Sequence[FilterClause],
        geo: Optional[GeoConstraint],
        projection: Sequence[str],
        sort: Sequence[SortField],
        skip: int,
        limit: int,
    ) -> List[Dict[str, Any]]:
        """
        Fetch one page of matching records.

        Args:
            filters: Clauses combined with AND
            geo: Optional radius constraint on the record location
            projection: Field names to include (empty means all fields)
            sort: Sort fields in priority order
            skip: Number of matching records to skip
            limit: Maximum number of records to return

        Returns:
            Ordered list of records
        """
        ...


class IGeocoder(Protocol):
    """Resolve place names to coordinates."""

    def resolve(self, place_name: str) -> Tuple[float, float]:
        """
        Resolve a place name.

        Args:
            place_name: Address or city name

        Returns:
            (longitude, latitude)

        Raises:
            GeocodingError: If the place cannot be resolved
        """
        ...


class IUserRepository(IRepository, Protocol):
    """Repository whose records are owned by a single user each."""

    def find_by_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch the record owned by a user.

        Args:
            user_id: Identifier of the owning user

        Returns:
            The record, or None if nothing matches or the id is malformed
        """
        ...
