"""
Resource orchestrator - main entry point.

Coordinates query translation, repository access and result formatting for
one listing resource.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from resource_query.adapters.mongodb.connection import MongoConnection
from resource_query.adapters.mongodb.repository import MongoRepository
from resource_query.core.interfaces import IGeocoder, IUserRepository
from resource_query.core.models import DEFAULT_RADIUS_KM, PageResult, QueryPlan
from resource_query.execution.result_formatter import ResultFormatter
from resource_query.query.translator import QueryTranslator
from resource_query.resources import ResourceConfig

logger = logging.getLogger(__name__)


class ResourceOrchestrator:
    """
    Listing and lookup for one resource type.

    Wraps a repository with a QueryTranslator configured for the resource's
    reserved parameters and geo support.
    """

    def __init__(
        self,
        resource: ResourceConfig,
        repository: IUserRepository,
        geocoder: Optional[IGeocoder] = None,
        default_radius_km: float = DEFAULT_RADIUS_KM,
    ):
        """
        Initialize resource orchestrator.

        Args:
            resource: Resource configuration
            repository: Repository for the resource's records
            geocoder: Geocoder, used only when the resource is geo-enabled
            default_radius_km: Radius used when a request gives none
        """
        self.resource = resource
        self.repository = repository
        self.translator = QueryTranslator(
            geocoder=geocoder if resource.geo_enabled else None,
            default_radius_km=default_radius_km,
            string_fields=resource.string_fields,
        )

    @classmethod
    def from_mongodb(
        cls,
        resource: ResourceConfig,
        connection: MongoConnection,
        geocoder: Optional[IGeocoder] = None,
        default_radius_km: float = DEFAULT_RADIUS_KM,
    ) -> "ResourceOrchestrator":
        """
        Create orchestrator backed by a MongoDB collection.

        Args:
            resource: Resource configuration
            connection: Open MongoDB connection
            geocoder: Geocoder for geo-enabled resources
            default_radius_km: Radius used when a request gives none

        Returns:
            Configured ResourceOrchestrator
        """
        repository = MongoRepository(connection.collection(resource.collection_name))
        return cls(
            resource=resource,
            repository=repository,
            geocoder=geocoder,
            default_radius_km=default_radius_km,
        )

    def plan(self, raw: Mapping[str, Any]) -> QueryPlan:
        """Parse raw parameters with this resource's reserved keys."""
        return self.translator.parse(raw, self.resource.reserved_keys)

    def search(self, raw: Mapping[str, Any]) -> PageResult:
        """Parse and execute a listing query."""
        plan = self.plan(raw)
        return self.translator.execute(plan, self.repository)

    def list(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Run a listing query and format the response envelope.

        Args:
            raw: RawParameters from the request

        Returns:
            ``{success, count, pagination, data}``
        """
        result = self.search(raw)
        logger.debug(
            "Listed %d of %d %s (page %d)",
            result.count,
            result.total_count,
            self.resource.name,
            result.page,
        )
        return ResultFormatter.format_page(result)

    def get_by_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Fetch the record owned by a user, or None if nothing matches."""
        return self.repository.find_by_user(user_id)
