"""
Unit conversion module.

Converts provider units and market units into the units the advisors use.
"""

import logging
from typing import Optional

from ..core import constants


class UnitConverter:
    """Convert between provider, market and advisory units."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize unit converter.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def ms_to_kmh(self, value: float) -> float:
        """Convert a wind speed from m/s (OpenWeatherMap metric units) to km/h."""
        return value * constants.MS_TO_KMH

    def fraction_to_percent(self, value: Optional[float]) -> float:
        """Convert a 0..1 probability (as sent by the forecast API) to percent."""
        if value is None:
            return 0.0
        return float(value) * 100.0

    def boxes_to_kg(self, boxes: float, kg_per_box: float) -> float:
        """
        Convert a count of market boxes into kilograms.

        Non-numeric or negative counts are treated as zero boxes.
        """
        try:
            count = float(boxes)
        except (TypeError, ValueError):
            self.logger.debug(f"Ignoring non-numeric box count {boxes!r}")
            return 0.0
        if count != count or count < 0:
            return 0.0
        return count * kg_per_box
