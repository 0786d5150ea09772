"""
Application facade for the Agrimoga advisory engine.

Wires configuration, logging, persistence and the advisors together and keeps
the per-section form state in the local store.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from . import catalogue
from .algorithms import (
    DiseaseRiskAdvisor,
    FertilizationPlanner,
    IrrigationAdvisor,
    IrrigationConstants,
    PricingCalculator,
    harvest,
)
from .core import Config, LocaleContext, constants, setup_logger
from .models import (
    AdvisoryDecision,
    AdvisoryLogEntry,
    CostBreakdown,
    FertilizationPlan,
    HarvestTotals,
    NPK,
    PlotConfiguration,
    PricingResult,
    RiskAssessment,
    RiskTier,
    ScenarioRow,
    WeatherReading,
)
from .services import AdvisoryLog, JSONStore, WeatherService, sharing


RiskListener = Callable[[RiskTier], None]

DEFAULT_IRRIGATION_FORM: Dict[str, Any] = {
    "crop": constants.DEFAULT_CROP,
    "zone": None,
    "pumpFlow": 800,
    "tempC": 20,
    "windKmh": 5,
    "rainPct": 10,
    "rainyTomorrow": False,
    "place": "",
}


@dataclass(frozen=True)
class IrrigationAdvice:
    """Irrigation decision with the inputs it was computed from."""

    decision: AdvisoryDecision
    reading: WeatherReading
    place: str = ""
    zone: Optional[str] = None
    warning: Optional[str] = None
    message: str = ""

    @property
    def share_url(self) -> str:
        return sharing.whatsapp_url(self.message)


@dataclass(frozen=True)
class SalesEstimate:
    """Pricing result, market scenarios and share text."""

    result: PricingResult
    price_per_kg: float
    waste_kg: float
    scenarios: List[ScenarioRow] = field(default_factory=list)
    message: str = ""

    @property
    def share_url(self) -> str:
        return sharing.whatsapp_url(self.message)


class AgrimogaApp:
    """Main application for the farm advisory engine."""

    def __init__(
        self,
        config_file: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        weather: Optional[WeatherService] = None
    ):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
            logger: Logger instance (defaults to the configured package logger)
            weather: Weather service (built from configuration when omitted)
        """
        self.config = Config(config_file)
        self.logger = logger or setup_logger()
        self.logger.info(f"Configuration: {self.config}")

        self.store = JSONStore(self.config.storage_directory, self.logger)
        self.advisory_log = AdvisoryLog(
            self.store,
            max_entries=self.config.log_max_entries,
            logger=self.logger,
        )
        self.weather = weather or WeatherService.from_config(self.config, self.logger)

        self.irrigation = IrrigationAdvisor(
            IrrigationConstants.from_overrides(self.config.irrigation_overrides),
            self.logger,
        )
        diseases = None
        if self.config.disease_catalogue_file:
            diseases = catalogue.load_disease_file(self.config.disease_catalogue_file)
        self.disease = DiseaseRiskAdvisor(diseases, self.logger)
        self.fertilization = FertilizationPlanner(self.logger)
        self.pricing = PricingCalculator(self.logger)

        self._risk_listeners: List[RiskListener] = []
        self._language = self.store.load(constants.KEY_LANGUAGE, self.config.default_language)

    # Localization

    @property
    def locale(self) -> LocaleContext:
        return LocaleContext(self._language)

    def set_language(self, lang: str) -> LocaleContext:
        """Switch the interface language; unsupported codes select Arabic."""
        locale = LocaleContext(lang)
        self._language = locale.lang
        self.store.save(constants.KEY_LANGUAGE, locale.lang)
        return locale

    # Irrigation

    def load_irrigation_form(self) -> Dict[str, Any]:
        form = dict(DEFAULT_IRRIGATION_FORM)
        stored = self.store.load(constants.KEY_IRRIGATION_FORM, {})
        if isinstance(stored, dict):
            form.update(stored)
        form["crop"] = catalogue.normalize_crop_key(form.get("crop"))
        return form

    def save_irrigation_form(self, form: Dict[str, Any]) -> None:
        self.store.save(constants.KEY_IRRIGATION_FORM, form)

    def advise_irrigation(
        self,
        crop: str,
        plot: PlotConfiguration,
        reading: Optional[WeatherReading] = None,
        place: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        zone: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
        record: bool = False
    ) -> IrrigationAdvice:
        """
        Compute today's irrigation advice.

        When a place or coordinates are given the reading is fetched; on
        failure the supplied reading (or the last saved one) is used and the
        advice carries a localized warning. Manual overrides replace fetched
        fields.

        Args:
            crop: Crop key
            plot: Plot geometry and network
            reading: Manually entered reading
            place: Place name to look up
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            zone: Zone preset name, for the log and share message
            overrides: WeatherReading fields entered by hand
            record: Append the advice to the advisory log

        Returns:
            IrrigationAdvice
        """
        locale = self.locale
        crop = catalogue.normalize_crop_key(crop)
        form = self.load_irrigation_form()
        fallback = reading or WeatherReading.from_dict(form)
        label = place or ""
        warning = None

        if place or (latitude is not None and longitude is not None):
            lookup = self.weather.resolve_reading(
                fallback, locale, latitude=latitude, longitude=longitude, place=place
            )
            reading, label, warning = lookup.reading, lookup.place, lookup.warning
        else:
            reading = fallback

        reading = reading.with_overrides(**(overrides or {})).clamped()
        decision = self.irrigation.recommend(crop, reading, plot, locale)
        message = sharing.build_irrigation_message(
            catalogue.get_crop(crop), decision, reading, locale, zone=zone, place=label
        )

        form.update({
            "crop": crop,
            "zone": zone,
            "pumpFlow": plot.pump_flow_lph,
            "tempC": reading.temperature_c,
            "windKmh": reading.wind_kmh,
            "rainPct": reading.rain_or_humidity_pct,
            "rainyTomorrow": reading.rainy_tomorrow,
            "place": label,
        })
        self.save_irrigation_form(form)
        self.store.save(constants.KEY_LAST_ADVICE, message)

        if record:
            self.advisory_log.append(AdvisoryLogEntry(
                timestamp=datetime.now(),
                crop_key=crop,
                location_label=label,
                quantity=decision.quantity,
                duration_minutes=decision.duration_minutes,
                weather=reading.to_dict(),
                zone=zone,
            ))

        self.logger.info(
            f"Irrigation advice for {crop}: {decision.kind.value}, "
            f"{decision.quantity} L, {decision.duration_minutes} min"
        )
        return IrrigationAdvice(
            decision=decision,
            reading=reading,
            place=label,
            zone=zone,
            warning=warning,
            message=message,
        )

    def advise_zone(
        self,
        crop: str,
        zone: str,
        pump_flow_lph: float = 0.0,
        **kwargs: Any
    ) -> IrrigationAdvice:
        """
        Advise for one of the crop's zone presets.

        Raises:
            KeyError: If the crop has no zone of that name
        """
        preset = catalogue.get_crop(crop).zones[zone]
        plot = PlotConfiguration.from_zone(preset, pump_flow_lph=pump_flow_lph)
        return self.advise_irrigation(crop, plot, zone=zone, **kwargs)

    def last_advice(self) -> str:
        return self.store.load(constants.KEY_LAST_ADVICE, "")

    def log_entries(self) -> List[AdvisoryLogEntry]:
        return self.advisory_log.entries()

    def clear_log(self) -> None:
        self.advisory_log.clear()

    # Disease risk

    def subscribe_risk(self, listener: RiskListener) -> Callable[[], None]:
        """
        Register a callback invoked with the tier after each assessment.

        Returns:
            Function that removes the listener
        """
        self._risk_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._risk_listeners:
                self._risk_listeners.remove(listener)

        return unsubscribe

    def current_risk(self) -> RiskTier:
        """Last persisted risk tier (low when none is stored)."""
        stored = self.store.load(constants.KEY_DISEASE_RISK, RiskTier.LOW.value)
        try:
            return RiskTier(stored)
        except ValueError:
            return RiskTier.LOW

    def assess_disease_risk(
        self,
        crop: str,
        reading: WeatherReading,
        include_breakdown: bool = True
    ) -> RiskAssessment:
        """Assess disease risk, persist the tier and notify listeners."""
        crop = catalogue.normalize_crop_key(crop)
        assessment = self.disease.assess(crop, reading, self.locale, include_breakdown)

        self.store.save(constants.KEY_DISEASE_FORM, {"crop": crop, **reading.to_dict()})
        self.store.save(constants.KEY_DISEASE_RISK, assessment.tier.value)

        for listener in list(self._risk_listeners):
            try:
                listener(assessment.tier)
            except Exception as e:
                self.logger.error(f"Risk listener {listener!r} failed: {e}", exc_info=True)
        return assessment

    # Fertilization

    def plan_fertilization(
        self,
        crop: str,
        dose_count: Any,
        seasonal: Optional[NPK] = None,
        start: Optional[date] = None,
        interval_days: Optional[int] = None
    ) -> FertilizationPlan:
        """
        Split the crop's seasonal target (or a custom one) into doses.

        Raises:
            ValidationError: If dose_count is not a positive integer
        """
        crop = catalogue.normalize_crop_key(crop)
        seasonal = seasonal or self.fertilization.default_target(crop)
        plan = self.fertilization.plan(seasonal, dose_count)
        if start is not None:
            plan = self.fertilization.schedule(plan, start, interval_days or 0)

        self.store.save(constants.KEY_FERTILIZATION_FORM, {
            "crop": crop,
            "doses": plan.dose_count,
            "splitDays": interval_days,
            **seasonal.to_dict(),
        })
        return plan

    # Pricing

    def estimate_sales(
        self,
        crop: str,
        yield_kg: float,
        waste: float = 0.0,
        waste_mode: str = "kg",
        price_per_kg: Optional[float] = None,
        price_preset: str = "avg",
        costs: Optional[CostBreakdown] = None
    ) -> SalesEstimate:
        """
        Estimate sale economics at one price and across market scenarios.

        Args:
            crop: Crop key
            yield_kg: Harvested quantity (kg)
            waste: Unsellable quantity, in kg or boxes
            waste_mode: "kg" or "boxes"
            price_per_kg: Selling price; the preset price when omitted
            price_preset: min, avg or max
            costs: Selling costs

        Returns:
            SalesEstimate
        """
        locale = self.locale
        crop = catalogue.normalize_crop_key(crop)
        costs = costs or CostBreakdown()
        if price_per_kg is None:
            price_per_kg = self.pricing.preset_price(crop, price_preset)

        waste_kg = self.pricing.waste_in_kg(crop, waste_mode, waste)
        result = self.pricing.compute(yield_kg, waste_kg, price_per_kg, costs)
        scenarios = self.pricing.scenarios(crop, yield_kg, waste_kg, costs, locale)
        message = sharing.build_pricing_message(
            catalogue.get_crop(crop), price_per_kg, result, locale
        )

        self.store.save(constants.KEY_PRICES_FORM, {
            "crop": crop,
            "yieldKg": yield_kg,
            "waste": waste,
            "wasteMode": waste_mode,
            "price": price_per_kg,
            "transport": costs.transport,
            "labor": costs.labor,
            "packaging": costs.packaging,
            "other": costs.other,
            "commission": costs.commission,
        })
        return SalesEstimate(
            result=result,
            price_per_kg=price_per_kg,
            waste_kg=waste_kg,
            scenarios=scenarios,
            message=message,
        )

    # Harvest ledger

    def harvest_totals(self) -> HarvestTotals:
        rows = self.store.load(constants.KEY_HARVEST_FORM, [])
        # Older ledgers kept the rows under "logs" next to the form fields
        if isinstance(rows, dict):
            rows = rows.get("logs")
        return harvest.summarize(rows if isinstance(rows, list) else [])

    def add_harvest(
        self,
        crop: str,
        qty_kg: Any,
        price: Any,
        quality: str = "A",
        on: Optional[date] = None
    ) -> HarvestTotals:
        """Record a picking at the head of the ledger and return new totals."""
        entries = self.harvest_totals().entries
        entries.insert(0, harvest.make_entry(crop, qty_kg, price, quality, on))
        self.store.save(constants.KEY_HARVEST_FORM, [entry.to_dict() for entry in entries])
        return harvest.summarize(entries)

    def remove_harvest(self, index: int) -> HarvestTotals:
        """Delete a ledger row by position; out-of-range positions are ignored."""
        entries = self.harvest_totals().entries
        if 0 <= index < len(entries):
            del entries[index]
            self.store.save(constants.KEY_HARVEST_FORM, [entry.to_dict() for entry in entries])
        return harvest.summarize(entries)

    def close(self) -> None:
        self.weather.close()
