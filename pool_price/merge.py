from __future__ import annotations

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, Iterator, List

from .config import PRICE_MARGIN_CENTS
from .models import RawRecord, UnifiedRecord

logger = logging.getLogger(__name__)


def compute_cost(price_cents: float, energy_kwh: float, margin_cents: float) -> float:
    """Hourly cost in euros for a spot price in cents/kWh plus margin."""

    cost = (price_cents + margin_cents) * energy_kwh / 100
    # Half-cent ties round away from zero, judged on the exact float value.
    return float(Decimal(cost).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def merge_series(
    price_series: Iterable[RawRecord],
    energy_series: Iterable[RawRecord],
    *,
    margin_cents: float = PRICE_MARGIN_CENTS,
) -> List[UnifiedRecord]:
    """Join price and energy records on their hourly timestamp.

    Each timestamp yields exactly one record. A repeated price hour keeps its
    first price; a repeated energy hour keeps its last value. Records are
    returned in the order their hour was first seen, prices first.
    """

    index: Dict[datetime, UnifiedRecord] = {}

    for raw in list(price_series):
        entry = index.get(raw.timestamp)
        if entry is None:
            index[raw.timestamp] = UnifiedRecord(timestamp=raw.timestamp, price=raw.value)
        else:
            logger.debug("Duplicate price for %s, keeping first value", raw.timestamp)

    for raw in energy_series:
        entry = index.get(raw.timestamp)
        if entry is None:
            index[raw.timestamp] = UnifiedRecord(timestamp=raw.timestamp, energy=raw.value)
        else:
            if entry.energy is not None:
                logger.debug("Duplicate energy for %s, keeping last value", raw.timestamp)
            entry.energy = raw.value

    records = list(index.values())
    for entry in records:
        if entry.is_complete:
            entry.cost = compute_cost(entry.price, entry.energy, margin_cents)

    _log_join_counts(records)
    return records


def complete_records(records: Iterable[UnifiedRecord]) -> Iterator[UnifiedRecord]:
    for entry in records:
        if entry.cost is not None:
            yield entry


def _log_join_counts(records: List[UnifiedRecord]) -> None:
    complete = sum(1 for entry in records if entry.is_complete)
    price_only = sum(1 for entry in records if entry.energy is None)
    energy_only = sum(1 for entry in records if entry.price is None)
    logger.info(
        "Merged %d hours: %d complete, %d price only, %d energy only",
        len(records),
        complete,
        price_only,
        energy_only,
    )
