"""
Tests for forecast aggregation, unit conversion and input clamping.
"""

import pytest  # type: ignore
from unittest.mock import Mock

from src.agrimoga.models import PlotConfiguration, WeatherReading
from src.agrimoga.processing import ForecastAggregator, InputValidator, UnitConverter, to_number


class TestForecastAggregator:
    """Test cases for ForecastAggregator."""

    @pytest.fixture
    def aggregator(self):
        return ForecastAggregator(logger=Mock())

    def test_summarize_fixture(self, aggregator, forecast_payload):
        summary = aggregator.summarize(forecast_payload["list"], place="Agadir")

        assert summary.place == "Agadir"
        assert summary.now.temperature_c == 24
        assert summary.now.wind_kmh == pytest.approx(18.0)
        assert summary.today.precipitation_probability_pct == pytest.approx(10.0)
        assert summary.tomorrow.temperature_c == pytest.approx(20.0)
        assert summary.tomorrow.precipitation_probability_pct == pytest.approx(60.0)
        assert summary.rainy_tomorrow is True

    def test_to_reading(self, aggregator, forecast_payload):
        reading = aggregator.summarize(forecast_payload["list"]).to_reading()

        assert reading == WeatherReading(
            temperature_c=24,
            wind_kmh=18,
            rain_or_humidity_pct=10,
            rainy_tomorrow=True,
            humidity_pct=70,
            rain_prob_pct=10,
        )

    def test_single_day_has_no_tomorrow(self, aggregator, forecast_payload):
        summary = aggregator.summarize(forecast_payload["list"][:8])

        assert summary.tomorrow is None
        assert summary.rainy_tomorrow is False

    def test_samples_without_temperature_skipped(self, aggregator):
        items = [
            {"main": {"humidity": 50}},
            {"main": {"temp": 15.5, "humidity": 40}, "wind": {"speed": 2}, "pop": 0.5},
        ]
        summary = aggregator.summarize(items)

        assert summary.now.temperature_c == 15.5
        assert summary.today.precipitation_probability_pct == 50

    def test_no_usable_samples(self, aggregator):
        assert aggregator.summarize([]) is None
        assert aggregator.summarize([{"main": {}}]) is None

    def test_malformed_items_skipped(self, aggregator):
        items = [
            "oops",
            None,
            {"main": {"temp": "n/a"}},
            {"main": "broken"},
            {"main": {"temp": "nan"}},
            {"main": {"temp": 14}, "wind": {"speed": float("inf")}},
            {"main": {"temp": 12, "humidity": "wet"}},
            {"main": {"temp": 21, "humidity": 60}, "wind": {"speed": 1}, "pop": 0.1},
        ]
        summary = aggregator.summarize(items)

        assert summary.now.temperature_c == 21
        assert summary.today.humidity_pct == 60

    def test_only_malformed_items(self, aggregator):
        assert aggregator.summarize([{"main": {"temp": "n/a"}}, ["x"]]) is None

    def test_missing_wind_and_pop_default_to_zero(self, aggregator):
        sample = aggregator.parse_sample({"main": {"temp": 10}})

        assert sample.wind_kmh == 0
        assert sample.precipitation_probability_pct == 0
        assert sample.humidity_pct == 0


class TestUnitConverter:
    """Test cases for UnitConverter."""

    @pytest.fixture
    def converter(self):
        return UnitConverter(logger=Mock())

    def test_wind_from_metres_per_second(self, converter):
        assert converter.ms_to_kmh(10) == pytest.approx(36.0)
        assert converter.ms_to_kmh(0) == 0

    def test_fraction_to_percent(self, converter):
        assert converter.fraction_to_percent(0.25) == 25
        assert converter.fraction_to_percent(None) == 0

    def test_boxes_to_kg(self, converter):
        assert converter.boxes_to_kg(4, 2.5) == 10
        assert converter.boxes_to_kg("x", 2.5) == 0
        assert converter.boxes_to_kg(float("nan"), 2.5) == 0


class TestInputValidator:
    """Test cases for InputValidator."""

    @pytest.fixture
    def validator(self):
        return InputValidator(logger=Mock())

    def test_reading_within_range_is_untouched(self, validator):
        reading = WeatherReading(temperature_c=20, wind_kmh=10, rain_or_humidity_pct=30)
        clamped, adjustments = validator.sanitize_reading(reading)

        assert clamped == reading
        assert adjustments == []

    def test_reading_out_of_range_reports_adjustments(self, validator):
        reading = WeatherReading(temperature_c=70, wind_kmh=-3, rain_or_humidity_pct=30)
        clamped, adjustments = validator.sanitize_reading(reading)

        assert clamped.temperature_c == 50
        assert clamped.wind_kmh == 0
        assert len(adjustments) == 2

    def test_plot_clamping(self, validator):
        plot = PlotConfiguration(area_m2=-1, emitters_per_m2=40, pump_flow_lph=1e9, plant_count=-3)
        clamped, adjustments = validator.sanitize_plot(plot)

        assert clamped.area_m2 == 0
        assert clamped.emitters_per_m2 == 16
        assert clamped.pump_flow_lph == 50000
        assert clamped.plant_count == 0
        assert len(adjustments) == 4

    @pytest.mark.parametrize("value,expected", [
        ("12.5", 12.5),
        (3, 3.0),
        (None, 0.0),
        ("", 0.0),
        (float("inf"), 0.0),
    ])
    def test_to_number(self, value, expected):
        assert to_number(value) == expected
