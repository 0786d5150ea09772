"""
OpenWeatherMap API operations.

Forecast by coordinates, forward geocoding and reverse geocoding.
"""

from typing import Dict, Any, List, Optional, Tuple

from .client import APIClient


class OpenWeatherAPI(APIClient):
    """OpenWeatherMap forecast and geocoding endpoints."""

    def __init__(self, base_url: str, api_key: str, **kwargs):
        """
        Initialize OpenWeatherMap client.

        Args:
            base_url: Provider base URL (https://api.openweathermap.org)
            api_key: Application key sent as the appid parameter
            **kwargs: APIClient options (timeout, max_retries, logger, ...)
        """
        super().__init__(base_url=base_url, **kwargs)
        self.api_key = api_key

    def _params(self, **params: Any) -> Dict[str, Any]:
        params["appid"] = self.api_key
        return params

    def get_forecast(self, latitude: float, longitude: float, lang: str = "en") -> Dict[str, Any]:
        """
        Get the 5-day / 3-hour forecast for a coordinate.

        Returns:
            Response with "list" (samples) and "city" sections
        """
        self.logger.info(f"Fetching forecast for ({latitude:.4f}, {longitude:.4f})")
        return self.get("/data/2.5/forecast", params=self._params(
            lat=latitude,
            lon=longitude,
            units="metric",
            lang=lang,
        ))

    def geocode(self, place: str, limit: int = 1) -> Optional[Tuple[float, float, str]]:
        """
        Resolve a place name to coordinates.

        Returns:
            Tuple of (latitude, longitude, name), or None if not found
        """
        results: List[Dict[str, Any]] = self.get("/geo/1.0/direct", params=self._params(
            q=place,
            limit=limit,
        ))
        if not results:
            return None
        first = results[0]
        return first["lat"], first["lon"], first.get("name", place)

    def reverse_geocode(self, latitude: float, longitude: float, lang: str) -> str:
        """
        Resolve coordinates to a place label, preferring the localized name.

        Returns:
            Place label, or empty string if the provider has none
        """
        results: List[Dict[str, Any]] = self.get("/geo/1.0/reverse", params=self._params(
            lat=latitude,
            lon=longitude,
            limit=1,
        ))
        if not results:
            return ""
        first = results[0]
        local_names = first.get("local_names") or {}
        return local_names.get(lang) or first.get("name") or ""
