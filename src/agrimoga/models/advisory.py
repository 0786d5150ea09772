"""
Advisory result models.

Contains DTOs produced by the advisors and recorded in the advisory log.
"""

from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from enum import Enum
from typing import Optional, Dict, Any, List, Tuple

from .crop import NPK


class DecisionKind(str, Enum):
    """Qualitative irrigation decision."""

    POSTPONE = "postpone"
    LIGHT = "light"
    NORMAL = "normal"
    HEAVY = "heavy"


class RiskTier(str, Enum):
    """Coarse disease-risk classification."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]


_TIER_RANK = {RiskTier.LOW: 0, RiskTier.MEDIUM: 1, RiskTier.HIGH: 2}


@dataclass(frozen=True)
class AdvisoryDecision:
    """Irrigation recommendation."""

    kind: DecisionKind
    quantity: int  # liters
    duration_minutes: Optional[int]
    title: str
    rationale: str
    tip: str
    actionable: bool = True
    uncapped_quantity: int = 0  # liters before the network cap
    per_plant: Optional[float] = None  # liters per plant, plant mode only

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


@dataclass(frozen=True)
class DiseaseScore:
    """Score and tier of a single disease rule."""

    disease_id: str
    name: str
    score: int
    tier: RiskTier


@dataclass(frozen=True)
class RiskAssessment:
    """Highest disease-risk tier for a crop and the per-disease scores."""

    tier: RiskTier
    breakdown: Tuple[DiseaseScore, ...] = ()


@dataclass(frozen=True)
class FertilizationPlan:
    """Seasonal target split into equal doses."""

    dose_count: int
    per_dose: NPK
    schedule: Tuple[date, ...] = ()


@dataclass(frozen=True)
class CostBreakdown:
    """Selling costs (MAD)."""

    transport: float = 0.0
    labor: float = 0.0
    packaging: float = 0.0
    other: float = 0.0
    commission: float = 0.0

    @property
    def base(self) -> float:
        return self.transport + self.labor + self.packaging + self.other

    @property
    def total(self) -> float:
        return self.base + self.commission


@dataclass(frozen=True)
class PricingResult:
    """Gross / net / break-even figures for one price."""

    sellable_kg: float
    gross: float
    base_costs: float
    commission: float
    total_costs: float
    net: float
    break_even_price_per_kg: float


@dataclass(frozen=True)
class ScenarioRow:
    """One row of the min / avg / max price comparison."""

    label: str
    price: float
    result: PricingResult

    @property
    def net(self) -> float:
        return self.result.net


@dataclass
class AdvisoryLogEntry:
    """Past irrigation advice kept for recall."""

    timestamp: datetime
    crop_key: str
    location_label: str
    quantity: int
    duration_minutes: Optional[int]
    weather: Dict[str, Any] = field(default_factory=dict)
    zone: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdvisoryLogEntry":
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            crop_key=data.get("crop_key", ""),
            location_label=data.get("location_label", ""),
            quantity=int(data.get("quantity", 0)),
            duration_minutes=data.get("duration_minutes"),
            weather=data.get("weather") or {},
            zone=data.get("zone"),
        )


@dataclass(frozen=True)
class HarvestEntry:
    """One picking recorded in the harvest ledger."""

    date: str  # ISO date
    crop: str
    quality: str
    qty_kg: float
    price: float
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class HarvestTotals:
    """Season totals of the harvest ledger."""

    sum_kg: float
    sum_mad: float
    entries: List[HarvestEntry] = field(default_factory=list)
