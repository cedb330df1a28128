"""
MapQuest geocoder.

Resolves place names through the MapQuest Geocoding API over HTTP.
"""

import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from resource_query.core.errors import GeocodingError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.mapquestapi.com/geocoding/v1"


class MapQuestGeocoder:
    """
    Geocoder backed by the MapQuest address endpoint.

    Implements the IGeocoder interface. Requests are not retried.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize MapQuest geocoder.

        Args:
            api_key: MapQuest consumer key
            base_url: Geocoding API base URL
            timeout: Request timeout in seconds
            client: Optional preconfigured httpx client (e.g. for tests)
        """
        if not api_key:
            raise ValueError("api_key is required (provide as parameter or set GEOCODER_API_KEY env var)")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = client or httpx.Client(timeout=timeout)

    def resolve(self, place_name: str) -> Tuple[float, float]:
        """
        Resolve a place name to coordinates.

        Args:
            place_name: Address or city name

        Returns:
            (longitude, latitude)

        Raises:
            GeocodingError: If the provider is unreachable or finds nothing
        """
        try:
            response = self.client.get(
                f"{self.base_url}/address",
                params={"key": self.api_key, "location": place_name, "maxResults": 1},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            logger.error("Geocoding request for '%s' failed: %s", place_name, e)
            raise GeocodingError(f"Geocoding request for '{place_name}' failed: {e}") from e
        except ValueError as e:
            raise GeocodingError(f"Invalid geocoding response for '{place_name}'") from e

        return self._extract_coordinates(payload, place_name)

    @staticmethod
    def _extract_coordinates(payload: Dict[str, Any], place_name: str) -> Tuple[float, float]:
        status = payload.get("info", {}).get("statuscode", 0)
        if status != 0:
            messages = "; ".join(payload.get("info", {}).get("messages", []))
            raise GeocodingError(f"Geocoding '{place_name}' failed: {messages or status}")

        results = payload.get("results") or []
        locations = results[0].get("locations") if results else None
        if not locations:
            raise GeocodingError(f"No location found for '{place_name}'")

        lat_lng = locations[0].get("latLng") or {}
        try:
            return float(lat_lng["lng"]), float(lat_lng["lat"])
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingError(f"No coordinates returned for '{place_name}'") from e

    def close(self) -> None:
        self.client.close()
