"""
Nominatim (OpenStreetMap) reverse geocoding.

Used as the alternate provider when OpenWeatherMap has no place name.
"""

from typing import Dict, Any

from .client import APIClient


class NominatimAPI(APIClient):
    """Reverse geocoding against a Nominatim instance."""

    ADDRESS_FIELDS = ("city", "town", "village", "municipality", "county", "state")

    def reverse_geocode(self, latitude: float, longitude: float, lang: str) -> str:
        """
        Resolve coordinates to a place label in the requested language.

        Returns:
            Most specific settlement name, else the display name, else ""
        """
        data: Dict[str, Any] = self.get("/reverse", params={
            "format": "jsonv2",
            "lat": latitude,
            "lon": longitude,
            "accept-language": lang,
            "zoom": 10,
        })
        address = data.get("address") or {}
        for field in self.ADDRESS_FIELDS:
            if address.get(field):
                return address[field]
        return data.get("display_name") or ""
