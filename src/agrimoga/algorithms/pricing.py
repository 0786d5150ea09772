"""
Pricing and break-even calculator.

    sellable  = max(0, yield - waste)
    gross     = sellable * price
    net       = gross - (transport + labor + packaging + other + commission)
    breakeven = total_costs / sellable, or 0 when nothing is sellable
"""

import logging
from typing import List, Optional

from .. import catalogue
from ..core.i18n import LocaleContext
from ..models import CostBreakdown, PricingResult, ScenarioRow
from ..processing import UnitConverter, to_number


SCENARIO_KEYS = ("min", "avg", "max")


class PricingCalculator:
    """Compute sale economics for a harvest."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize pricing calculator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.converter = UnitConverter(logger)

    def compute(
        self,
        yield_kg: float,
        waste_kg: float,
        price_per_kg: float,
        costs: CostBreakdown
    ) -> PricingResult:
        """
        Compute gross, net and break-even figures.

        Args:
            yield_kg: Harvested quantity (kg)
            waste_kg: Unsellable quantity (kg)
            price_per_kg: Selling price (MAD/kg)
            costs: Selling costs

        Returns:
            PricingResult
        """
        sellable = max(0.0, to_number(yield_kg) - to_number(waste_kg))
        gross = sellable * to_number(price_per_kg)
        base_costs = (
            to_number(costs.transport) + to_number(costs.labor)
            + to_number(costs.packaging) + to_number(costs.other)
        )
        commission = to_number(costs.commission)
        total_costs = base_costs + commission
        net = gross - total_costs
        break_even = total_costs / sellable if sellable > 0 else 0.0

        return PricingResult(
            sellable_kg=sellable,
            gross=gross,
            base_costs=base_costs,
            commission=commission,
            total_costs=total_costs,
            net=net,
            break_even_price_per_kg=break_even,
        )

    def scenarios(
        self,
        crop: str,
        yield_kg: float,
        waste_kg: float,
        costs: CostBreakdown,
        locale: Optional[LocaleContext] = None
    ) -> List[ScenarioRow]:
        """
        Compare outcomes at the crop's low, average and high market prices.

        Returns:
            Three ScenarioRow entries in min / avg / max order
        """
        locale = locale or LocaleContext()
        band = catalogue.get_crop(crop).price_band
        rows = []
        for key in SCENARIO_KEYS:
            price = getattr(band, key)
            rows.append(ScenarioRow(
                label=locale.t(f"sc.{key}"),
                price=price,
                result=self.compute(yield_kg, waste_kg, price, costs),
            ))
        return rows

    def preset_price(self, crop: str, preset: str = "avg") -> float:
        """Market price for a preset name (min, avg or max)."""
        if preset not in SCENARIO_KEYS:
            raise ValueError(f"Unknown price preset: {preset}")
        return getattr(catalogue.get_crop(crop).price_band, preset)

    def boxes_to_kg(self, crop: str, boxes: float) -> float:
        """Convert a number of market boxes of a crop into kilograms."""
        return self.converter.boxes_to_kg(boxes, catalogue.get_crop(crop).kg_per_box)

    def waste_in_kg(self, crop: str, mode: str, waste: float) -> float:
        """Waste entered either in kg or in boxes, expressed in kg."""
        if mode == "boxes":
            return self.boxes_to_kg(crop, waste)
        return max(0.0, to_number(waste))
