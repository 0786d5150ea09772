"""
Crop data models.

Contains DTOs for crop profiles, plot presets and disease rules.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any

from ..core.i18n import LocalizedText, LocalizedList


@dataclass(frozen=True)
class NPK:
    """Nitrogen / phosphorus / potassium quantities (kg/ha)."""

    n: float
    p: float
    k: float

    def to_dict(self) -> Dict[str, float]:
        return {"n": self.n, "p": self.p, "k": self.k}


@dataclass(frozen=True)
class PriceBand:
    """Market price band (MAD/kg)."""

    min: float
    avg: float
    max: float


@dataclass(frozen=True)
class ZonePreset:
    """Named drip-network preset for a crop."""

    name: str
    area_m2: float
    plants: int
    emitters_per_plant: float
    emitter_flow_lph: float


@dataclass(frozen=True)
class CropProfile:
    """Static configuration for a supported crop."""

    key: str
    name: LocalizedText
    demand_per_m2: float  # L/m²/day
    demand_per_plant: float  # L/plant/day
    fertilization_target: NPK  # seasonal kg/ha
    price_band: PriceBand
    kg_per_box: float
    tip: LocalizedText
    zones: Dict[str, ZonePreset] = field(default_factory=dict)


@dataclass(frozen=True)
class DiseaseRule:
    """Optional weather thresholds whose hits add to a disease score."""

    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    humidity_min: Optional[float] = None
    humidity_max: Optional[float] = None
    rain_prob_min: Optional[float] = None
    soil_wet_flag: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "DiseaseRule":
        """Build a rule from catalogue JSON (camelCase keys), ignoring unknown fields."""
        data = data or {}
        return cls(
            temp_min=data.get("tempMin"),
            temp_max=data.get("tempMax"),
            humidity_min=data.get("humidityMin"),
            humidity_max=data.get("humidityMax"),
            rain_prob_min=data.get("rainProbMin"),
            soil_wet_flag=bool(data.get("soilWetFlag", False)),
        )


@dataclass(frozen=True)
class Disease:
    """Disease catalogue entry scoped to one crop."""

    id: str
    crop: str
    name: LocalizedText
    rule: DiseaseRule
    causes: LocalizedList = field(default_factory=LocalizedList)
    actions: LocalizedList = field(default_factory=LocalizedList)
