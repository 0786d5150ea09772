"""
Data models for the Agrimoga advisory engine.

Contains DTOs for weather, crops, plots and advisory results.
"""

from .weather import WeatherReading, WeatherSample, ForecastSummary, clamp
from .crop import NPK, PriceBand, ZonePreset, CropProfile, DiseaseRule, Disease
from .plot import PlotConfiguration
from .advisory import (
    DecisionKind,
    RiskTier,
    AdvisoryDecision,
    DiseaseScore,
    RiskAssessment,
    FertilizationPlan,
    CostBreakdown,
    PricingResult,
    ScenarioRow,
    AdvisoryLogEntry,
    HarvestEntry,
    HarvestTotals,
)

__all__ = [
    "WeatherReading",
    "WeatherSample",
    "ForecastSummary",
    "clamp",
    "NPK",
    "PriceBand",
    "ZonePreset",
    "CropProfile",
    "DiseaseRule",
    "Disease",
    "PlotConfiguration",
    "DecisionKind",
    "RiskTier",
    "AdvisoryDecision",
    "DiseaseScore",
    "RiskAssessment",
    "FertilizationPlan",
    "CostBreakdown",
    "PricingResult",
    "ScenarioRow",
    "AdvisoryLogEntry",
    "HarvestEntry",
    "HarvestTotals",
]
