"""
Resource definitions.

Each listing resource names its collection and whether it supports radius
search around a geocoded place.
"""

from typing import Dict, FrozenSet

from pydantic import BaseModel, ConfigDict

from resource_query.query.translator import BASE_RESERVED_KEYS, GEO_RESERVED_KEYS


class ResourceConfig(BaseModel):
    """Configuration for one listing resource."""

    model_config = ConfigDict(frozen=True)

    name: str
    collection_name: str
    label: str
    geo_enabled: bool = False
    # Stored as strings; query values for them are not coerced to numbers
    string_fields: FrozenSet[str] = frozenset()

    @property
    def reserved_keys(self) -> FrozenSet[str]:
        """Parameter names that are never treated as filters."""
        if self.geo_enabled:
            return BASE_RESERVED_KEYS | GEO_RESERVED_KEYS
        return BASE_RESERVED_KEYS


JOBS = ResourceConfig(
    name="jobs",
    collection_name="jobs",
    label="Babysitting job",
    geo_enabled=True,
    string_fields=frozenset({
        "description",
        "contactPhone",
        "contactEmail",
        "location.street",
        "location.city",
        "location.state",
        "location.country",
    }),
)
# Sitters store a plain "city" string, so "city" filters by equality there
SITTERS = ResourceConfig(
    name="sitters",
    collection_name="sitters",
    label="Sitter profile",
    string_fields=frozenset({
        "city",
        "description",
        "experience",
        "hourlyRate",
        "contactPhone",
        "contactEmail",
    }),
)

RESOURCES: Dict[str, ResourceConfig] = {r.name: r for r in (JOBS, SITTERS)}
