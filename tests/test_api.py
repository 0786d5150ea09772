"""
Tests for the provider API clients.

The HTTP session is mocked; requests are checked for URL and parameters.
"""

import unittest
from unittest.mock import Mock

import requests  # type: ignore

from src.agrimoga.api import APIClient, NominatimAPI, OpenWeatherAPI


def json_response(payload):
    response = Mock()
    response.json = Mock(return_value=payload)
    response.raise_for_status = Mock()
    return response


class TestAPIClient(unittest.TestCase):
    """Test the base client session setup."""

    def test_retry_and_headers(self):
        client = APIClient("https://example.org/", max_retries=3, user_agent="agrimoga-test", logger=Mock())

        adapter = client.session.get_adapter("https://example.org/x")
        self.assertEqual(adapter.max_retries.total, 3)
        self.assertEqual(client.base_url, "https://example.org")
        self.assertEqual(client.session.headers["User-Agent"], "agrimoga-test")
        client.close()

    def test_context_manager_closes_session(self):
        with APIClient("https://example.org", logger=Mock()) as client:
            client.session.close = Mock()
        client.session.close.assert_called_once()

    def test_http_error_is_logged_without_query(self):
        logger = Mock()
        client = OpenWeatherAPI("https://api.openweathermap.org", "SECRET", logger=logger)
        response = json_response({})
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("401 Client Error")
        client.session.request = Mock(return_value=response)

        with self.assertRaises(requests.exceptions.HTTPError):
            client.get_forecast(35.0, -6.0)

        message = logger.warning.call_args[0][0]
        self.assertIn("HTTPError", message)
        self.assertNotIn("SECRET", message)


class TestOpenWeatherAPI(unittest.TestCase):
    """Test OpenWeatherMap endpoints."""

    def setUp(self):
        """Set up test fixtures."""
        self.api = OpenWeatherAPI("https://api.openweathermap.org", "KEY", timeout=5, logger=Mock())
        self.api.session.request = Mock()

    def test_get_forecast(self):
        self.api.session.request.return_value = json_response({"list": []})

        self.assertEqual(self.api.get_forecast(35.19, -6.15, lang="fr"), {"list": []})

        self.api.session.request.assert_called_once_with(
            method="GET",
            url="https://api.openweathermap.org/data/2.5/forecast",
            timeout=5,
            params={"lat": 35.19, "lon": -6.15, "units": "metric", "lang": "fr", "appid": "KEY"},
        )

    def test_geocode(self):
        self.api.session.request.return_value = json_response(
            [{"name": "Larache", "lat": 35.19, "lon": -6.15}]
        )
        self.assertEqual(self.api.geocode("Larache"), (35.19, -6.15, "Larache"))

    def test_geocode_not_found(self):
        self.api.session.request.return_value = json_response([])
        self.assertIsNone(self.api.geocode("Atlantis"))

    def test_reverse_geocode_prefers_local_name(self):
        self.api.session.request.return_value = json_response(
            [{"name": "Larache", "local_names": {"ar": "العرائش", "fr": "Larache"}}]
        )
        self.assertEqual(self.api.reverse_geocode(35.19, -6.15, "ar"), "العرائش")

    def test_reverse_geocode_falls_back_to_name(self):
        self.api.session.request.return_value = json_response([{"name": "Larache"}])
        self.assertEqual(self.api.reverse_geocode(35.19, -6.15, "en"), "Larache")

    def test_reverse_geocode_empty(self):
        self.api.session.request.return_value = json_response([])
        self.assertEqual(self.api.reverse_geocode(35.19, -6.15, "en"), "")


class TestNominatimAPI(unittest.TestCase):
    """Test the alternate reverse geocoder."""

    def setUp(self):
        """Set up test fixtures."""
        self.api = NominatimAPI("https://nominatim.openstreetmap.org", logger=Mock())
        self.api.session.request = Mock()

    def test_settlement_name(self):
        self.api.session.request.return_value = json_response({
            "address": {"village": "Douar X", "state": "Souss-Massa"},
            "display_name": "Douar X, Souss-Massa, Maroc",
        })
        self.assertEqual(self.api.reverse_geocode(30.4, -9.5, "fr"), "Douar X")

        params = self.api.session.request.call_args[1]["params"]
        self.assertEqual(params["accept-language"], "fr")
        self.assertEqual(params["format"], "jsonv2")

    def test_display_name_fallback(self):
        self.api.session.request.return_value = json_response({"display_name": "Somewhere"})
        self.assertEqual(self.api.reverse_geocode(30.4, -9.5, "en"), "Somewhere")

    def test_nothing_found(self):
        self.api.session.request.return_value = json_response({"error": "Unable to geocode"})
        self.assertEqual(self.api.reverse_geocode(0.0, 0.0, "en"), "")
