from __future__ import annotations

from typing import Iterable

from .aggregates import aggregate_records
from .config import Settings
from .merge import complete_records, merge_series
from .models import RawRecord
from .reporting import PriceReport, build_price_report


def build_report(
    price_series: Iterable[RawRecord],
    energy_series: Iterable[RawRecord],
    settings: Settings | None = None,
) -> PriceReport:
    """Merge both series, aggregate the priced hours and summarize them."""

    settings = settings or Settings()
    merged = merge_series(
        price_series,
        energy_series,
        margin_cents=settings.price_margin_cents,
    )
    aggregation = aggregate_records(
        complete_records(merged),
        winter_months=settings.winter_months,
    )
    return build_price_report(
        aggregation,
        fixed_price_reference_cents=settings.fixed_price_reference_cents,
    )
