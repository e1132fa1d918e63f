from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, TypeVar

from .config import FIXED_PRICE_REFERENCE_CENTS
from .errors import DegenerateAverageError
from .models import Aggregation, Bucket, MonthKey

K = TypeVar("K")

NOT_AVAILABLE = "n/a"

# Fixed table so labels do not depend on the process locale.
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class BucketSummary:
    label: str
    total_energy_kwh: float
    total_cost_eur: float
    average_price_eur_per_kwh: float | None
    reference_cost_eur: float
    difference_eur: float


@dataclass(frozen=True)
class PriceReport:
    monthly: List[BucketSummary]
    yearly: List[BucketSummary]
    winter: List[BucketSummary]
    total_energy_kwh: float
    total_cost_eur: float
    reference_cost_eur: float
    difference_eur: float
    difference_pct: float


def build_price_report(
    aggregation: Aggregation,
    *,
    fixed_price_reference_cents: float = FIXED_PRICE_REFERENCE_CENTS,
) -> PriceReport:
    """Summarize buckets chronologically and compare them to a fixed price."""

    def summarize(buckets: Mapping[K, Bucket], label: Callable[[K], str]) -> List[BucketSummary]:
        return [
            _summarize(label(key), bucket, fixed_price_reference_cents)
            for key, bucket in sorted(buckets.items())
        ]

    # Every priced hour lands in exactly one year, so yearly buckets cover the totals.
    total_energy = sum(bucket.total_energy_kwh for bucket in aggregation.yearly.values())
    total = sum(bucket.total_cost_eur for bucket in aggregation.yearly.values())
    reference_total = _reference_cost(total_energy, fixed_price_reference_cents)
    difference = total - reference_total

    return PriceReport(
        monthly=summarize(aggregation.monthly, month_label),
        yearly=summarize(aggregation.yearly, year_label),
        winter=summarize(aggregation.seasonal, year_label),
        total_energy_kwh=total_energy,
        total_cost_eur=total,
        reference_cost_eur=reference_total,
        difference_eur=difference,
        difference_pct=_difference_pct(reference_total, difference),
    )


def safe_average_price(bucket: Bucket) -> float | None:
    try:
        return bucket.average_price_eur_per_kwh
    except DegenerateAverageError:
        return None


def month_label(key: MonthKey) -> str:
    year, month = key
    return f"{MONTH_NAMES[month - 1]} {year}"


def year_label(year: int) -> str:
    return str(year)


def render_text(report: PriceReport) -> str:
    """Render the report as the console listing of months, years and winters."""

    lines = ["Monthly Report:"]
    lines.extend(_render_line("Month", item) for item in report.monthly)
    lines.append("Yearly Report:")
    lines.extend(_render_line("Year", item) for item in report.yearly)
    lines.append("Winter Summary:")
    lines.extend(_render_line("Year", item) for item in report.winter)
    return "\n".join(lines)


def report_to_dict(report: PriceReport) -> Dict[str, object]:
    return {
        "summary": {
            "total_energy_kwh": round(report.total_energy_kwh, 2),
            "total_cost_eur": round(report.total_cost_eur, 2),
            "reference_cost_eur": round(report.reference_cost_eur, 2),
            "difference_eur": round(report.difference_eur, 2),
            "difference_pct": round(report.difference_pct, 1),
        },
        "monthly": [_summary_to_dict(item) for item in report.monthly],
        "yearly": [_summary_to_dict(item) for item in report.yearly],
        "winter": [_summary_to_dict(item) for item in report.winter],
    }


def _summarize(label: str, bucket: Bucket, fixed_price_reference_cents: float) -> BucketSummary:
    reference = _reference_cost(bucket.total_energy_kwh, fixed_price_reference_cents)
    return BucketSummary(
        label=label,
        total_energy_kwh=bucket.total_energy_kwh,
        total_cost_eur=bucket.total_cost_eur,
        average_price_eur_per_kwh=safe_average_price(bucket),
        reference_cost_eur=reference,
        difference_eur=bucket.total_cost_eur - reference,
    )


def _reference_cost(energy_kwh: float, fixed_price_reference_cents: float) -> float:
    return energy_kwh * fixed_price_reference_cents / 100


def _difference_pct(reference_total: float, difference: float) -> float:
    if reference_total == 0:
        return 0.0
    return (difference / reference_total) * 100.0


def _render_line(kind: str, item: BucketSummary) -> str:
    if item.average_price_eur_per_kwh is None:
        average = NOT_AVAILABLE
    else:
        average = f"€{item.average_price_eur_per_kwh:.3f}"
    return (
        f"{kind}: {item.label}, Total Energy: {item.total_energy_kwh:.2f} kWh, "
        f"Total Cost: €{item.total_cost_eur:.2f}, Average Price: {average}"
    )


def _summary_to_dict(item: BucketSummary) -> Dict[str, object]:
    average = item.average_price_eur_per_kwh
    return {
        "period": item.label,
        "energy_kwh": round(item.total_energy_kwh, 2),
        "cost_eur": round(item.total_cost_eur, 2),
        "average_price_eur_per_kwh": None if average is None else round(average, 3),
        "reference_cost_eur": round(item.reference_cost_eur, 2),
        "difference_eur": round(item.difference_eur, 2),
    }
