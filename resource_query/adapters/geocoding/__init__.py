"""Geocoding adapter for resource queries."""

from resource_query.adapters.geocoding.mapquest import MapQuestGeocoder

__all__ = ["MapQuestGeocoder"]
