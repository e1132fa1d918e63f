from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Tuple

from .errors import DegenerateAverageError

MonthKey = Tuple[int, int]


@dataclass(frozen=True)
class RawRecord:
    """A single parsed sample from one source, timestamp already hour-truncated."""

    timestamp: datetime
    value: float


@dataclass
class UnifiedRecord:
    """Hourly view joining spot price (cents/kWh) and consumption (kWh)."""

    timestamp: datetime
    price: float | None = None
    energy: float | None = None
    cost: float | None = None

    @property
    def is_complete(self) -> bool:
        return self.price is not None and self.energy is not None


@dataclass(frozen=True)
class Bucket:
    """Running sums of energy and cost for one month, year or winter season."""

    total_energy_kwh: float = 0.0
    total_cost_eur: float = 0.0
    records: int = 0

    def add(self, energy_kwh: float, cost_eur: float) -> "Bucket":
        return Bucket(
            total_energy_kwh=self.total_energy_kwh + energy_kwh,
            total_cost_eur=self.total_cost_eur + cost_eur,
            records=self.records + 1,
        )

    @property
    def average_price_eur_per_kwh(self) -> float:
        if self.total_energy_kwh == 0:
            raise DegenerateAverageError("Bucket has no consumed energy.")
        return self.total_cost_eur / self.total_energy_kwh


@dataclass(frozen=True)
class Aggregation:
    """Monthly, yearly and seasonal buckets produced from the merged records."""

    monthly: Dict[MonthKey, Bucket] = field(default_factory=dict)
    yearly: Dict[int, Bucket] = field(default_factory=dict)
    seasonal: Dict[int, Bucket] = field(default_factory=dict)
