from __future__ import annotations

from typing import AbstractSet, Dict, Iterable, TypeVar

from .config import WINTER_MONTHS
from .models import Aggregation, Bucket, MonthKey, UnifiedRecord

K = TypeVar("K")


def aggregate_records(
    records: Iterable[UnifiedRecord],
    *,
    winter_months: AbstractSet[int] = WINTER_MONTHS,
) -> Aggregation:
    """Fold priced hours into monthly, yearly and winter buckets.

    Records without a cost are skipped. Winter buckets are keyed by the
    calendar year of the record, so January and December of one year land
    in the same bucket.
    """

    monthly: Dict[MonthKey, Bucket] = {}
    yearly: Dict[int, Bucket] = {}
    seasonal: Dict[int, Bucket] = {}

    for item in records:
        if item.cost is None or item.energy is None:
            continue
        year = item.timestamp.year
        month = item.timestamp.month
        _add(monthly, (year, month), item.energy, item.cost)
        _add(yearly, year, item.energy, item.cost)
        if month in winter_months:
            _add(seasonal, year, item.energy, item.cost)

    return Aggregation(monthly=monthly, yearly=yearly, seasonal=seasonal)


def _add(buckets: Dict[K, Bucket], key: K, energy_kwh: float, cost_eur: float) -> None:
    buckets[key] = buckets.get(key, Bucket()).add(energy_kwh, cost_eur)
