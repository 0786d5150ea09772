"""
Location resolution service.

Forward geocoding goes through OpenWeatherMap. Reverse geocoding tries
OpenWeatherMap, then Nominatim, then gives up with an empty label.
"""

import logging
from typing import Optional, Tuple

import requests  # type: ignore

from ..api import OpenWeatherAPI, NominatimAPI
from ..core.exceptions import WeatherFetchError


class LocationResolver:
    """Resolve place names and coordinates."""

    def __init__(
        self,
        primary: Optional[OpenWeatherAPI] = None,
        fallback: Optional[NominatimAPI] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize location resolver.

        Args:
            primary: OpenWeatherMap client (None when no API key is configured)
            fallback: Alternate reverse geocoder
            logger: Logger instance
        """
        self.primary = primary
        self.fallback = fallback
        self.logger = logger or logging.getLogger(__name__)

    def geocode(self, place: str) -> Tuple[float, float, str]:
        """
        Resolve a place name to coordinates.

        Returns:
            Tuple of (latitude, longitude, name)

        Raises:
            WeatherFetchError: If no provider is configured, the request fails
                               or the place is unknown
        """
        if self.primary is None:
            raise WeatherFetchError("missing_api_key")
        try:
            result = self.primary.geocode(place)
        except (requests.exceptions.RequestException, ValueError, KeyError) as e:
            raise WeatherFetchError("fetch_failed", str(e)) from e
        if result is None:
            raise WeatherFetchError("place_not_found", place)
        return result

    def reverse(self, latitude: float, longitude: float, lang: str) -> str:
        """
        Resolve coordinates to a human-readable label.

        Returns:
            Localized place label, or "" when every provider fails
        """
        for provider in (self.primary, self.fallback):
            if provider is None:
                continue
            try:
                label = provider.reverse_geocode(latitude, longitude, lang)
            except (requests.exceptions.RequestException, ValueError, KeyError, AttributeError) as e:
                self.logger.info(f"Reverse geocoding via {type(provider).__name__} failed: {e}")
                continue
            if label:
                return label
        return ""
