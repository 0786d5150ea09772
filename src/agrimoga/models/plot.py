"""
Plot data models.

Contains the plot geometry and drip-network description used for dosing.
"""

from dataclasses import dataclass
from typing import Optional

from ..core import constants
from .crop import ZonePreset
from .weather import clamp


@dataclass(frozen=True)
class PlotConfiguration:
    """
    Plot geometry and hydraulic network.

    Dosing is per plant when plant_count is set, per m² otherwise.
    """

    area_m2: float
    emitters_per_m2: float = 0.0
    emitter_flow_lph: float = 0.0
    pump_flow_lph: float = 0.0
    plant_count: Optional[int] = None
    emitters_per_plant: float = 0.0

    @property
    def per_plant(self) -> bool:
        return self.plant_count is not None

    @property
    def emitter_count(self) -> float:
        if self.per_plant:
            return self.plant_count * self.emitters_per_plant
        return self.area_m2 * self.emitters_per_m2

    @property
    def emitter_flow_total_lph(self) -> float:
        """Maximum flow the emitters can deliver (L/h)."""
        return self.emitter_count * self.emitter_flow_lph

    def clamped(self) -> "PlotConfiguration":
        """Return a copy with negative or out-of-range values clamped."""
        plant_count = self.plant_count
        if plant_count is not None:
            plant_count = int(round(clamp(plant_count, (0.0, float("inf")))))
        return PlotConfiguration(
            area_m2=clamp(self.area_m2, (0.0, float("inf"))),
            emitters_per_m2=clamp(self.emitters_per_m2, constants.EMITTERS_LIMITS),
            emitter_flow_lph=clamp(self.emitter_flow_lph, constants.EMITTER_FLOW_LIMITS),
            pump_flow_lph=clamp(self.pump_flow_lph, constants.PUMP_FLOW_LIMITS),
            plant_count=plant_count,
            emitters_per_plant=clamp(self.emitters_per_plant, constants.EMITTERS_LIMITS),
        )

    @classmethod
    def from_zone(
        cls,
        zone: ZonePreset,
        pump_flow_lph: float = 0.0
    ) -> "PlotConfiguration":
        """Build a per-plant configuration from a crop zone preset."""
        return cls(
            area_m2=zone.area_m2,
            emitter_flow_lph=zone.emitter_flow_lph,
            pump_flow_lph=pump_flow_lph,
            plant_count=zone.plants,
            emitters_per_plant=zone.emitters_per_plant,
        )
